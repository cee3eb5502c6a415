"""Library configuration.

Defaults used by directory streams when an argument is not passed
explicitly. Every value can be overridden through an environment variable
prefixed with ``FRAMEDIR_``, e.g. ``FRAMEDIR_RECURSIVE=1``.
"""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Directory stream defaults."""

    # Enumeration
    # Matching is case-sensitive on POSIX, so upper-case extensions are listed too
    DEFAULT_PATTERNS: list[str] = [
        "*.png", "*.jpg", "*.jpeg", "*.bmp", "*.gif",
        "*.PNG", "*.JPG", "*.JPEG", "*.BMP", "*.GIF",
    ]
    NATURAL_SORT: bool = True
    RECURSIVE: bool = False

    # Decoding
    DEFAULT_FRAMEWORK: Literal["PIL", "CV"] = "PIL"  # Backend of the default loader

    model_config = {"env_prefix": "FRAMEDIR_"}


settings = Settings()
