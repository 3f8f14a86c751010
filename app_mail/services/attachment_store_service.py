"""
Attachment store

Uploads mail attachments to the S3-compatible object storage. Uploaded
objects are written once and referenced by every stored copy of a message.
"""
import logging
import re
import uuid
from typing import Optional, Dict, Any, List

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from app_mail.config import get_app_config
from app_mail.exceptions.attachment_upload_exception import AttachmentUploadException
from app_mail.exceptions.mail_validation_exception import MailValidationException
from app_mail.pojo.mail_draft import AttachmentRef
from common.components.singleton import Singleton
from common.exceptions.configuration_error_exception import ConfigurationErrorException

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def sanitize_filename(filename: str) -> str:
    """Make a filename safe for an object key"""
    safe = re.sub(r'[^a-zA-Z0-9._-]', '_', filename or 'attachment')
    if len(safe) > 255:
        name, ext = safe.rsplit('.', 1) if '.' in safe else (safe, '')
        safe = name[:250] + ('.' + ext if ext else '')
    return safe


class AttachmentStoreService(Singleton):
    """Attachment store backed by boto3"""

    def __init__(self):
        try:
            config = get_app_config()
            self.bucket = config.get("oss_bucket", "mail-attachments")
            self.max_attachments = config.get("max_attachments", 5)
            self.max_attachment_size = config.get("max_attachment_size", 10 * 1024 * 1024)
            endpoint_url = config.get("oss_endpoint", "http://localhost:8000/api/oss")

            # the storage endpoint does not check credentials
            self.s3_client = boto3.client(
                's3',
                endpoint_url=endpoint_url,
                aws_access_key_id='dummy',
                aws_secret_access_key='dummy',
                region_name='us-east-1',
                config=Config(signature_version='s3v4')
            )

            logger.info(f"[AttachmentStoreService] Initialized with bucket={self.bucket}, endpoint={endpoint_url}")

        except Exception as e:
            logger.exception(f"[AttachmentStoreService] Failed to initialize: {e}")
            raise ConfigurationErrorException(f"Failed to initialize attachment store: {str(e)}") from e

    def upload_attachment(
            self,
            key: str,
            data: bytes,
            content_type: Optional[str] = None,
            metadata: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """
        Upload raw bytes

        Args:
            key: Object key
            data: Attachment data
            content_type: MIME type
            metadata: Optional user metadata

        Returns:
            Dictionary with bucket, key and size

        Raises:
            AttachmentUploadException: If the store rejects the upload
        """
        try:
            extra_args = {}
            if content_type:
                extra_args['ContentType'] = content_type
            if metadata:
                extra_args['Metadata'] = metadata

            self.s3_client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                **extra_args
            )

            logger.info(f"[upload_attachment] Uploaded {self.bucket}/{key}, size={len(data)}")

            return {
                'bucket': self.bucket,
                'key': key,
                'size': len(data)
            }

        except ClientError as e:
            logger.error(f"[upload_attachment] Failed to upload {self.bucket}/{key}: {e}")
            raise AttachmentUploadException(f"Failed to upload attachment: {key}") from e
        except Exception as e:
            logger.exception(f"[upload_attachment] Unexpected error uploading {self.bucket}/{key}: {e}")
            raise AttachmentUploadException(f"Failed to upload attachment: {key}") from e

    def check_upload_limits(self, files) -> None:
        """
        Raises:
            MailValidationException: Too many files or a file too large
        """
        if len(files) > self.max_attachments:
            raise MailValidationException(f"At most {self.max_attachments} attachments are allowed")
        for upload in files:
            if upload.size > self.max_attachment_size:
                raise MailValidationException(f"Attachment {upload.name} exceeds {self.max_attachment_size} bytes")

    def upload_files(self, owner_id: int, files) -> List[AttachmentRef]:
        """
        Upload the files of a request, in request order

        Args:
            owner_id: Uploading user ID
            files: Uploaded files (name, size, content_type, read())

        Returns:
            References of the stored objects

        Raises:
            MailValidationException: If upload limits are exceeded
            AttachmentUploadException: If any upload fails
        """
        files = list(files or [])
        if not files:
            return []

        self.check_upload_limits(files)

        refs = []
        for upload in files:
            filename = upload.name
            content_type = getattr(upload, 'content_type', None) or DEFAULT_CONTENT_TYPE
            key = f"{owner_id}/{uuid.uuid4().hex}/{sanitize_filename(filename)}"

            result = self.upload_attachment(
                key=key,
                data=upload.read(),
                content_type=content_type,
                metadata={'filename': filename}
            )
            refs.append(AttachmentRef(
                filename=filename,
                size=result['size'],
                oss_bucket=result['bucket'],
                oss_key=result['key'],
                content_type=content_type
            ))

        logger.info(f"[upload_files] Uploaded {len(refs)} attachments for user {owner_id}")
        return refs
