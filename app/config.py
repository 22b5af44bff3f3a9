from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Notion 連線設定 ---
    NOTION_API_TOKEN: str = ""
    NOTION_DATABASE_ID: str = ""
    NOTION_API_BASE_URL: str = "https://api.notion.com/v1"
    NOTION_API_VERSION: str = "2022-06-28"
    NOTION_PAGE_SIZE: int = 50

    # --- Notion 資料庫欄位名稱 ---
    NOTION_DATE_PROPERTY: str = "日期"
    NOTION_TITLE_PROPERTIES: list[str] = ["课程主题/日期", "课程主题", "名称"]
    NOTION_TEACHER_PROPERTY: str = "老师"
    NOTION_CLASS_PROPERTY: str = "关联班级"
    NOTION_STATUS_PROPERTY: str = "课程状态"
    NOTION_ATTENDANCE_PROPERTY: str = "出勤率"

    # --- 服務設定 ---
    PORT: int = 3000
    CORS_ORIGINS: list[str] = ["*"]

    # --- 課表前端 ---
    SCHEDULE_API_URL: str = "http://localhost:3000"

    # 設定檔配置
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )

settings = Settings()
