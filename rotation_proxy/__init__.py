"""Rotation Proxy

An OpenAI-compatible gateway that routes chat completions to third-party LLM
providers and rotates through a pool of API keys per provider.
"""

from importlib.metadata import PackageNotFoundError, version

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

try:
    __version__ = version("rotation-proxy")
except PackageNotFoundError:
    # Fallback for source checkouts
    __version__ = "1.0.0"
__author__ = "Rotation Proxy"
