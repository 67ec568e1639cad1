from .error_handler import ErrorHandlerMiddleware, status_for_exception

__all__ = ["ErrorHandlerMiddleware", "status_for_exception"]
