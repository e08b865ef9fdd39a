"""Version information for the API Gateway Python SDK"""

__version__ = "0.1.0"
