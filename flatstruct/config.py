from pydantic import BaseModel, ConfigDict, Field


class FlattenConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    separator: str = Field(default=".", min_length=1)
    # dataclasses.field(metadata={tag_key: "name,opts"})
    tag_key: str = "json"
    omit_option: str = "omitempty"


DEFAULT_CONFIG = FlattenConfig()
