"""Request-side types the router consumes: Request and QueryParams."""
