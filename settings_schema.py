from typing import Literal

from pydantic import BaseModel, Field, ValidationError

class SettingsSchema(BaseModel):
    db_path: str = "roobench.db"
    weight_unit: Literal["kg", "lb"] = "kg"
    height_unit: Literal["cm", "ft_in"] = "cm"
    tip_interval: float = Field(default=6.0, gt=0)
    save_confirmation_delay: float = Field(default=2.0, ge=0)
    seed_mock_history: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

def validate_settings(data: dict) -> SettingsSchema:
    try:
        return SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
