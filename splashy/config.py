"""
splashy Configuration Management

This file handles loading the handful of settings a client needs: where the API lives, how long to
wait for it, and (optionally) the access key to authenticate with. Settings come from environment
variables only. A .env file in the working directory is read first via python-dotenv so that a
developer can keep their key out of their shell profile. Raise a SplashyConfigError for any issue
that arises in processing these variables.

Recognized variables:

    UNSPLASH_ACCESS_KEY   access key from https://unsplash.com/oauth/applications
    SPLASHY_API_URL       root of the API (default https://api.unsplash.com/)
    SPLASHY_TIMEOUT       seconds to wait for a response (default 10)
"""

import os
from math import isfinite
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from splashy import __version__
from splashy.errors import SplashyConfigError

API_URL = "https://api.unsplash.com/"


@dataclass(frozen=True)
class SplashyConfig:
    """
    Immutable settings shared by every call made through one client. A client holds on to a single
    SplashyConfig for its whole lifetime, so it is safe to share between threads.
    """

    api_url: str = API_URL
    timeout: float = 10.0
    user_agent: str = f"splashy/{__version__}"
    access_key: Optional[str] = field(default=None, repr=False)

    def __post_init__(self):
        """
        Normalize the api url so that relative endpoint paths can be joined onto it, and reject
        values that could never work.
        """

        try:
            parsed = urlparse(self.api_url)
        except ValueError as error:
            raise SplashyConfigError(
                f"There was an issue reading api_url '{self.api_url}': {error}"
            ) from error

        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise SplashyConfigError(f"api_url must be an absolute http(s) url, got '{self.api_url}'.")

        if not self.api_url.endswith("/"):
            # frozen dataclass, so bypass the generated __setattr__
            object.__setattr__(self, "api_url", f"{self.api_url}/")

        if not isfinite(self.timeout) or self.timeout <= 0:
            raise SplashyConfigError(f"timeout must be a positive number of seconds, got {self.timeout}.")

    @property
    def api_host(self) -> str:
        return urlparse(self.api_url).netloc


def load_config(dotenv_path: Optional[str] = None) -> SplashyConfig:
    """
    Build a SplashyConfig from environment variables, loading a .env file first. Variables already
    set in the environment win over the .env file.
    """

    load_dotenv(dotenv_path=dotenv_path, override=False)

    kwargs = {}

    if os.environ.get("SPLASHY_API_URL"):
        kwargs["api_url"] = os.environ["SPLASHY_API_URL"]

    if os.environ.get("SPLASHY_TIMEOUT"):
        try:
            kwargs["timeout"] = float(os.environ["SPLASHY_TIMEOUT"])
        except ValueError as error:
            raise SplashyConfigError(
                f"There was an issue reading SPLASHY_TIMEOUT: {error}"
            ) from error

    if os.environ.get("UNSPLASH_ACCESS_KEY"):
        kwargs["access_key"] = os.environ["UNSPLASH_ACCESS_KEY"].strip()

    return SplashyConfig(**kwargs)
