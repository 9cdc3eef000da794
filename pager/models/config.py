from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    A single environment variable a client needs.

    Attributes:
        env_key (str): The key without the "{CLIENT_TYPE}_{ENGINE}_" prefix, e.g. "BASE_URL".
        val_type (str): One of "string", "number" and "bool".
        default (str | int | float | bool | None): Fallback value. None marks the variable as required.
    """

    env_key: str
    val_type: str = "string"
    default: str | int | float | bool | None = None
