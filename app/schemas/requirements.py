from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


class Requirements(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    specialized: Number = 0
    general_edu: Number = Field(0, alias="generalEdu")
    obtained_specialized: Number = Field(0, alias="obtainedSpecialized")
    obtained_general_education: Number = Field(0, alias="obtainedGeneralEducation")


class RequirementsUpdateIn(BaseModel):
    # 負の値はここでは弾かず、ストア側で 0 に丸める
    model_config = ConfigDict(populate_by_name=True)

    specialized: Optional[Number] = None
    general_edu: Optional[Number] = Field(None, alias="generalEdu")
    obtained_specialized: Optional[Number] = Field(None, alias="obtainedSpecialized")
    obtained_general_education: Optional[Number] = Field(None, alias="obtainedGeneralEducation")
