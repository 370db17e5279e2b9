"""Response messages shared by the routers and error handlers."""

# Wire messages for successful operations
SERIES_CREATED_MESSAGE = "Series created successfully"
SERIES_COMPLETED_MESSAGE = "Series completed successfully"
SERIES_DELETED_MESSAGE = "Series deleted successfully"
SESSION_STARTED_MESSAGE = "Session started successfully"
SESSION_COMPLETED_MESSAGE = "Session completed successfully"
SESSION_DELETED_MESSAGE = "Session deleted successfully"
SESSION_DELETED_WITH_SERIES_MESSAGE = "Session deleted and series removed (no sessions remaining)"
INTERACTION_RECORDED_MESSAGE = "Interaction recorded successfully"

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."
