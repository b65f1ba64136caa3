import os
from typing import Optional

from dotenv import load_dotenv


class EnvManager:
    """Read environment variables, loading the project .env file once."""

    _loaded: bool = False

    @classmethod
    def load(cls, path: Optional[str] = None) -> None:
        if cls._loaded:
            return
        load_dotenv(dotenv_path=path, override=False)
        cls._loaded = True

    @classmethod
    def get_env_variable(cls, name: str, default: Optional[str] = None) -> str:
        """Get an environment variable or fall back to the default."""
        cls.load()
        value = os.getenv(name)
        if value is None or value == "":
            return default  # type: ignore
        return value
