import logging
import os
from dotenv import load_dotenv

# Configuração de logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

# Carrega as variáveis de ambiente
load_dotenv(dotenv_path=".env", encoding="utf-8")

# Silencia logs de SQLAlchemy
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


class Configuration:
    def __init__(self):

        # Rota de login do painel (redirecionamento quando a sessão expira)
        self.login_path = os.getenv("LOGIN_PATH", "/login")

        self.environment = os.getenv("ENVIRONMENT", "development").lower()

        # Banco de dados
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")

        # JWT
        self.secret_key = os.getenv("JWT_SECRET") or os.getenv("SECRET_KEY", "storefront-dev-secret")
        self.jwt_expiration_days = int(os.getenv("JWT_EXPIRATION_DAYS", 30))
        self.token_cookie_name = os.getenv("TOKEN_COOKIE_NAME", "token")

        # OAuth
        self.google_client_id = os.getenv("GOOGLE_CLIENT_ID")
        self.google_tokeninfo_url = os.getenv("GOOGLE_TOKENINFO_URL", "https://oauth2.googleapis.com/tokeninfo")

        # Bucket S3 compatível
        self.storage_endpoint_url = os.getenv("STORAGE_ENDPOINT_URL")
        self.storage_access_key_id = os.getenv("STORAGE_ACCESS_KEY_ID")
        self.storage_secret_access_key = os.getenv("STORAGE_SECRET_ACCESS_KEY")
        self.storage_bucket_name = os.getenv("STORAGE_BUCKET_NAME", "product-images")
        self.storage_public_url = os.getenv("STORAGE_PUBLIC_URL", "")
        self.storage_region = os.getenv("STORAGE_REGION", "auto")

        self.cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]

        # Relatórios
        self.currency = os.getenv("CURRENCY", "BDT")
        self.locale = os.getenv("LOCALE", "en")

        # Carrinho / admin
        self.cart_cookie_name = os.getenv("CART_COOKIE_NAME", "cart_key")
        self.cart_record_ttl_days = int(os.getenv("CART_RECORD_TTL_DAYS", 30))
        self.admin_page_size = int(os.getenv("ADMIN_PAGE_SIZE", 10))

        self.enable_scheduler = os.getenv("ENABLE_SCHEDULER", "false").lower() in ("1", "true", "yes")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def connect_to_database(self):
        logging.info(f"BANCO DE DADOS >>> SELECIONADO -> : {self.database_url.split('@')[-1]}")
        return self.database_url
