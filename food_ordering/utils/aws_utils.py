import uuid
from urllib.parse import urlparse

from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app
from werkzeug.utils import secure_filename

from food_ordering.core.constants import ALLOWED_IMAGE_EXTENSIONS
from food_ordering.core.exceptions import BadRequest, ImageUploadError
from food_ordering.extensions import get_s3_client


def allowed_file(filename):
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_IMAGE_EXTENSIONS


def validate_image(image, field="image"):
    """Reject a missing or unsupported upload before anything is written"""
    if image is None or not image.filename:
        raise BadRequest(code="IMAGE_REQUIRED", message=f"{field} is required")
    if not allowed_file(image.filename):
        raise BadRequest(code="UNSUPPORTED_IMAGE_TYPE", message=f"Unsupported file type: {image.filename}")


def upload_image_to_s3(s3_client, bucket_name, region, image, folder, owner_id):
    """
    Upload a single image to AWS S3 under <folder>/<owner_id>/.
    Returns the public URL of the uploaded object.
    Raises ImageUploadError when the client is missing or S3 rejects the call.
    """
    if s3_client is None or not bucket_name:
        raise ImageUploadError("Image storage is not configured.")

    filename = secure_filename(image.filename)
    s3_key = f"{folder.rstrip('/')}/{owner_id}/{uuid.uuid4().hex}_{filename}"

    try:
        s3_client.upload_fileobj(
            image,
            bucket_name,
            s3_key,
            ExtraArgs={"ContentType": image.content_type}
        )
    except (BotoCoreError, ClientError) as e:
        current_app.logger.error("S3UploadFailed | key=%s | error=%s", s3_key, str(e))
        raise ImageUploadError() from e

    return f"https://{bucket_name}.s3.{region}.amazonaws.com/{s3_key}"


def upload_image(image, folder, owner_id):
    """Upload an image with the app's configured bucket"""
    return upload_image_to_s3(
        s3_client=get_s3_client(),
        bucket_name=current_app.config.get("AWS_S3_BUCKET_NAME"),
        region=current_app.config.get("AWS_REGION"),
        image=image,
        folder=folder,
        owner_id=owner_id,
    )


def delete_images_from_s3(image_urls: list[str], s3_client=None) -> dict:
    """
    Deletes multiple images from AWS S3 using their URLs.
    """
    if not image_urls:
        return {"deleted": [], "errors": ["No image URLs provided."]}

    if s3_client is None:
        s3_client = get_s3_client()
    if s3_client is None:
        return {"deleted": [], "errors": ["S3 client is not configured."]}

    deleted_keys = []
    errors = []

    try:
        # Parse bucket and key for each URL
        objects_by_bucket = {}
        for url in image_urls:
            parsed = urlparse(url)
            bucket = parsed.netloc.split('.')[0]
            key = parsed.path.lstrip('/').split('?')[0]
            if not bucket or not key:
                errors.append(f"Invalid URL {url}")
                continue
            objects_by_bucket.setdefault(bucket, []).append({'Key': key})

        # Delete per-bucket (in case URLs span multiple buckets)
        for bucket, keys_to_delete in objects_by_bucket.items():
            for i in range(0, len(keys_to_delete), 1000):
                batch = keys_to_delete[i:i + 1000]
                response = s3_client.delete_objects(
                    Bucket=bucket,
                    Delete={'Objects': batch}
                )
                deleted_keys.extend([obj['Key'] for obj in response.get('Deleted', [])])

                for err in response.get('Errors', []):
                    errors.append(f"{err['Key']}: {err.get('Message', 'Unknown error')}")

    except (BotoCoreError, ClientError) as e:
        errors.append(str(e))

    return {"deleted": deleted_keys, "errors": errors}
