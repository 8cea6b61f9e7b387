"""
User settings API schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel

from trainlog.models.user_settings import WeightUnit


class UserSettingsUpdate(BaseModel):
    weight_unit: WeightUnit


class UserSettingsResponse(BaseModel):
    weight_unit: WeightUnit
    updated_at: Optional[datetime.datetime]
