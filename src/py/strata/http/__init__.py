from .model import HTTPRequest, headername  # NOQA: F401

# EOF
