from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "", "case_sensitive": False}

    # App
    environment: str = "development"
    debug: bool = True
    app_name: str = "Solar Estimator"
    log_json: bool = False
    cors_origins: str = "http://localhost:3000"

    # OpenCage geocoding (empty key = offline city table only)
    opencage_api_key: str = ""
    opencage_base_url: str = "https://api.opencagedata.com/geocode/v1"

    # NREL Solar Resource
    nrel_api_key: str = "DEMO_KEY"
    nrel_base_url: str = "https://developer.nrel.gov/api/solar"
    irradiance_lookup_enabled: bool = True

    http_timeout_seconds: float = 10.0

    # Used when an address cannot be geocoded (geographic centre of the contiguous US)
    fallback_latitude: float = 39.8283
    fallback_longitude: float = -98.5795

    # Address estimates per client per minute
    estimate_rate_limit: int = 10

    @property
    def geocoding_enabled(self) -> bool:
        return bool(self.opencage_api_key)


settings = Settings()
