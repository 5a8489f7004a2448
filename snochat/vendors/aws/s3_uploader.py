""" File: S3 Uploader Service """

# Python Packages
from io import BytesIO

import boto3

# Constants
from ...base import constants





class S3Uploader:
    """ Stores uploaded chat attachments in the configured bucket... """

    def __init__(self, client = None, bucket_name: str = None):
        self.bucket_name = bucket_name or constants.AWS_S3_BUCKET_NAME
        self.client = client or boto3.client(
            's3',
            aws_access_key_id = constants.AWS_ACCESS_KEY_ID,
            aws_secret_access_key = constants.AWS_SECRET_ACCESS_KEY,
            region_name = constants.AWS_REGION
        )

    def upload_bytes(self, data: bytes, s3_key: str, content_type: str = None) -> str:
        """
        Upload raw bytes to S3 and return the stored object key
        """

        extra_args = {"ContentType": content_type} if content_type else None

        self.client.upload_fileobj(
            Fileobj = BytesIO(data),
            Bucket = self.bucket_name,
            Key = s3_key,
            ExtraArgs = extra_args
        )

        return s3_key
