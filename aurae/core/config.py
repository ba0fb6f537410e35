from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Comma-separated medication names the host classifies as preventive.
    # An entry whose acute/preventive flag is unset counts as acute unless
    # its name appears here.
    # Example: "Topiramate,Propranolol,Amitriptyline"
    PREVENTIVE_MEDICATIONS: str = ""

    @property
    def preventive_medications(self) -> frozenset[str]:
        return frozenset(
            name.strip().casefold()
            for name in self.PREVENTIVE_MEDICATIONS.split(",")
            if name.strip()
        )


settings = Settings()
