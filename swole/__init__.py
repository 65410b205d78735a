"""Cookie-backed A/B testing: experiments, a manager, cookie helpers and a demo WSGI server."""

__version__ = "0.1.0"