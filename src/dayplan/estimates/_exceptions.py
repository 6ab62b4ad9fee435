class EstimateComputationError(RuntimeError):
    """Raised when input data is too malformed to produce trustworthy estimates."""
