import logging
import secrets
import time
from functools import lru_cache
from typing import Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from storefront.configuration.settings import Configuration
from storefront.core.exceptions.errors import StorefrontError

configuration = Configuration()

PLACEHOLDER_IMAGE = "/placeholder.svg?height=400&width=400"


def generate_file_name(original_name: str) -> str:
    """<millis>-<aleatório>.<extensão>"""
    extension = original_name.rsplit(".", 1)[-1].lower() if "." in original_name else "bin"
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}.{extension}"


def is_external_path(file_path: Optional[str]) -> bool:
    # Placeholders e URLs completas não são objetos do bucket
    return not file_path or "placeholder.svg" in file_path or file_path.startswith("http")


def resolve_public_url(file_path: Optional[str], public_base: Optional[str] = None) -> str:
    base = (configuration.storage_public_url if public_base is None else public_base).rstrip("/")
    if not file_path or not file_path.strip():
        return PLACEHOLDER_IMAGE
    if file_path.startswith("http://") or file_path.startswith("https://"):
        return file_path
    if not base:
        return PLACEHOLDER_IMAGE
    return f"{base}/{file_path}"


class BucketError(StorefrontError):
    pass


class BucketService:
    def __init__(self, client=None, bucket_name: Optional[str] = None, public_url: Optional[str] = None):
        try:
            self.client = client or boto3.client(
                's3',
                endpoint_url=configuration.storage_endpoint_url,
                aws_access_key_id=configuration.storage_access_key_id,
                aws_secret_access_key=configuration.storage_secret_access_key,
                config=Config(signature_version='s3v4'),
                region_name=configuration.storage_region,
            )
        except Exception as e:
            logging.error(f"STORAGE >>> Erro ao configurar cliente do bucket: {str(e)}")
            raise
        self.bucket_name = bucket_name or configuration.storage_bucket_name
        self.public_base = (public_url if public_url is not None else configuration.storage_public_url).rstrip("/")

    def upload_file(self, file_content: bytes, original_name: str, content_type: str) -> str:
        """Envia o arquivo e devolve apenas o caminho no bucket."""
        file_name = generate_file_name(original_name)
        try:
            self.client.put_object(
                Bucket=self.bucket_name,
                Key=file_name,
                Body=file_content,
                ContentType=content_type,
                CacheControl="max-age=3600",
            )
        except (BotoCoreError, ClientError) as e:
            logging.error(f"STORAGE >>> Erro ao fazer upload: {str(e)}")
            raise BucketError(str(e)) from e
        logging.info(f"STORAGE >>> Upload concluído: {file_name}")
        return file_name

    def delete_file(self, file_path: str) -> None:
        if is_external_path(file_path):
            return
        try:
            self.client.delete_object(Bucket=self.bucket_name, Key=file_path)
        except (BotoCoreError, ClientError) as e:
            logging.error(f"STORAGE >>> Erro ao deletar {file_path}: {str(e)}")
            raise BucketError(str(e)) from e

    def public_url(self, file_path: Optional[str]) -> str:
        return resolve_public_url(file_path, self.public_base)


@lru_cache(maxsize=1)
def get_bucket_service() -> BucketService:
    return BucketService()
