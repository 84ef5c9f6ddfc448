from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from app.schemas.project_data import BrandConfig, ProjectData


class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeckRequest(_Wire):
    brand: BrandConfig = Field(default_factory=BrandConfig)
    project_data: ProjectData = Field(default_factory=ProjectData)


class GammaRequest(_Wire):
    brand: BrandConfig | None = None
    project_data: ProjectData = Field(default_factory=ProjectData)
    company_name: str = ""
    email: EmailStr | None = None

    def resolved_brand(self) -> BrandConfig:
        # A bare companyName is accepted for clients that send no brand block
        if self.brand is not None:
            return self.brand
        return BrandConfig(company_name=self.company_name)


class GammaAsyncRequest(GammaRequest):
    email: EmailStr


class GammaResponse(_Wire):
    success: bool = True
    gamma_url: str | None = None
    export_url: str | None = None
    credits: dict | None = None


class QueuedResponse(_Wire):
    queued: bool = True
    message: str


class SendDeckRequest(_Wire):
    email: EmailStr
    export_url: str = Field(min_length=1)
    project_data: ProjectData = Field(default_factory=ProjectData)
    company_name: str = ""


class SuccessResponse(_Wire):
    success: bool = True
