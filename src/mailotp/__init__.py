"""Mail OTP: pull one-time passwords out of verification emails."""

__all__ = ["__version__"]

__version__ = "0.1.0"
