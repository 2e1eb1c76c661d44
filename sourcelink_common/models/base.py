from pydantic import BaseModel, ConfigDict


class BaseEntity(BaseModel):
    """Base for records handed to the core by the credential store; read only"""

    model_config = ConfigDict(frozen=True)
