# presentai/storage.py
import boto3
from botocore.client import Config
from botocore.exceptions import ClientError
from flask import current_app, url_for


def _is_configured(config) -> bool:
    return all([config.get("S3_ACCESS_KEY"), config.get("S3_SECRET_KEY"), config.get("S3_BUCKET")])


def get_s3_client():
    """Returns the S3 client for the current app, building it on first use."""
    client = current_app.extensions.get("s3_client")
    if client is not None:
        return client

    config = current_app.config
    if not _is_configured(config):
        current_app.logger.error("S3/MinIO settings are not fully configured. File storage will not work.")
        return None

    client = boto3.client(
        "s3",
        endpoint_url=config.get("S3_ENDPOINT") or None,
        aws_access_key_id=config.get("S3_ACCESS_KEY"),
        aws_secret_access_key=config.get("S3_SECRET_KEY"),
        config=Config(signature_version="s3v4"),
        region_name=config.get("S3_REGION") or "us-east-1",  # Required by boto3, ignored by MinIO
        use_ssl=config.get("S3_USE_SSL", False),
    )
    current_app.extensions["s3_client"] = client
    return client


def get_s3_bucket_name():
    """Returns the configured S3 bucket name."""
    return current_app.config.get("S3_BUCKET")


def _require_client():
    s3 = get_s3_client()
    if s3 is None:
        raise RuntimeError("S3 client is not initialized. Check your storage settings.")
    return s3


def ensure_bucket():
    """
    Checks if the bucket exists and creates it if it doesn't.
    Run once per deployment (``flask ensure-bucket``).
    """
    s3 = get_s3_client()
    bucket = get_s3_bucket_name()
    if not s3:
        current_app.logger.error("Cannot ensure bucket, S3 client is not configured.")
        return False

    try:
        s3.head_bucket(Bucket=bucket)
        current_app.logger.info(f"S3 Bucket '{bucket}' already exists.")
    except ClientError as e:
        # If the bucket does not exist, a 404 error is returned
        if e.response['Error']['Code'] in ('404', 'NoSuchBucket'):
            current_app.logger.info(f"S3 Bucket '{bucket}' not found. Creating it...")
            s3.create_bucket(Bucket=bucket)
            current_app.logger.info(f"S3 Bucket '{bucket}' created successfully.")
        else:
            current_app.logger.error(f"Error checking for S3 bucket '{bucket}': {e}")
            raise
    return True


def put_bytes(key: str, data: bytes, content_type="image/png"):
    """Uploads a bytes object to the bucket and returns its key."""
    s3 = _require_client()
    s3.put_object(Bucket=get_s3_bucket_name(), Key=key, Body=data, ContentType=content_type)
    return key


def get_object(key: str):
    """Fetches an object; raises botocore ClientError (NoSuchKey) when absent."""
    s3 = _require_client()
    return s3.get_object(Bucket=get_s3_bucket_name(), Key=key)


def public_url(key: str) -> str:
    """Permanent URL for a stored key: the public bucket URL if set, else the /files proxy."""
    base = current_app.config.get("S3_PUBLIC_BASE_URL")
    if base:
        return f"{base.rstrip('/')}/{key}"
    return url_for("main.serve_s3_file", key=key, _external=True)
