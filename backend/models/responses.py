from pydantic import BaseModel

from models.schemas.bonus import BonusFamily, BonusType
from models.schemas.pass_cut import PassCutRow


class BonusValidationResponse(BaseModel):
    ok: bool = True
    bonus_type: BonusType = BonusType.NONE
    family: BonusFamily = BonusFamily.NONE


class PassCutResponse(BaseModel):
    rows: list[PassCutRow] = []
