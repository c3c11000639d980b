# quintave/schemas/analytics.py
from pydantic import BaseModel

class DailyProgress(BaseModel):
    date: str
    money_in: float
    money_out: float
    net: float
