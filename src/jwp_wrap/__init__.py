"""jwp-wrap — typed client wrapper for the JW Platform video API.

Built on httpx and pydantic with a strict layered architecture.
"""

from jwp_wrap.version import __version__

__all__: list[str] = ["__version__"]
