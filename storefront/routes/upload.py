# storefront/routes/upload.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from storefront.core.middlewares.users import require_admin
from storefront.schemas.upload import UploadResponse
from storefront.storage.bucket import BucketError, BucketService, get_bucket_service

ALLOWED_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB


class UploadRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_api_route("/upload", self.upload_file, methods=["POST"], response_model=UploadResponse)
        self.add_api_route("/upload", self.delete_file, methods=["DELETE"], response_model=dict)

    async def upload_file(
        self,
        file: Optional[UploadFile] = File(None),
        admin: dict = Depends(require_admin),
        bucket: BucketService = Depends(get_bucket_service),
    ):
        if file is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")

        if file.content_type not in ALLOWED_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid file type. Only JPEG, PNG, and WebP are allowed.",
            )

        contents = await file.read()
        if len(contents) > MAX_FILE_SIZE:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File size too large. Maximum size is 5MB.")

        try:
            file_path = bucket.upload_file(
                file_content=contents,
                original_name=file.filename or "upload",
                content_type=file.content_type,
            )
        except BucketError as e:
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

        # Só o caminho; a URL pública é montada na leitura
        return UploadResponse(success=True, file_path=file_path, message="File uploaded successfully")

    def delete_file(
        self,
        path: Optional[str] = Query(None),
        admin: dict = Depends(require_admin),
        bucket: BucketService = Depends(get_bucket_service),
    ):
        if not path:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file path provided")

        try:
            bucket.delete_file(path)
        except BucketError as e:
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e) or "Failed to delete file")

        logging.info(f"STORAGE >>> Arquivo removido: {path}")
        return {"success": True, "message": "File deleted successfully"}
