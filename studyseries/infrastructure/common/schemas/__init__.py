from .response_wrappers import CamelModel, ErrorResponse, PaginatedResponse, SuccessResponse

__all__ = ["CamelModel", "ErrorResponse", "PaginatedResponse", "SuccessResponse"]
