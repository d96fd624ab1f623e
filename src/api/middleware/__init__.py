"""
API Middleware - Request/response processing

Exception handlers converting domain and validation errors into the
standard error envelope.
"""
