from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    jira_username: str = ""
    jira_password: str = ""
    jira_base_url: str = "https://jirat.hbm.com/"
    story_points_field: str = "customfield_10021"
    epic_link_field: str = "customfield_10025"
    custom_field_prefix: str = "customfield_"
    trigger_phrase: str = "@bot subtract"
    host: str = "0.0.0.0"
    port: int = 8060
    log_level: str = "INFO"

    model_config = {"env_file": ".env"}


settings = Settings()
