class KastroError(Exception):
    """Base error."""

class ConvergenceError(KastroError, ArithmeticError):
    """Raised when a root refinement has no sign change or does not converge."""
