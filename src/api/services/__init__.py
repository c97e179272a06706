# Query services used by routers; SQL lives here rather than in route handlers.
