from .wsgi import WSGIBridge, WSGIResponseWriter  # NOQA: F401

# EOF
