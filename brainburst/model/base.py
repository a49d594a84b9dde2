import datetime

import pydantic as p


class BaseModel(p.BaseModel):
    model_config = p.ConfigDict(from_attributes=True)


class WithCtime(BaseModel):
    create_time: datetime.datetime


class WithMtime(BaseModel):
    update_time: datetime.datetime


class WithTimestamps(WithCtime, WithMtime): ...
