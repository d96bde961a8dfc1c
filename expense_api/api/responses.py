from expense_api.schemas.common import ErrorResponse

BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid input"}}
NOT_FOUND = {404: {"model": ErrorResponse, "description": "Not found"}}
RATE_LIMITED = {429: {"model": ErrorResponse, "description": "Too many requests"}}
