# presentai/images.py
import re
import time

import requests
from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app
from openai import OpenAIError
from requests.exceptions import RequestException
from sqlalchemy.exc import SQLAlchemyError

from . import db
from .models import GeneratedImage
from .openai_helpers import generate_openai_image
from .storage import put_bytes, public_url


class ImageGenerationError(Exception):
    """A step of the generate -> download -> upload -> save flow failed; the message is user-facing."""


def build_image_filename(prompt: str, timestamp_ms: int | None = None) -> str:
    """First 20 prompt characters, non-alphanumerics replaced by '_', plus a millisecond timestamp."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    stem = re.sub(r"[^a-z0-9]", "_", prompt[:20], flags=re.IGNORECASE)
    return f"{stem}_{timestamp_ms}.png"


def build_image_key(user_id, filename: str) -> str:
    return f"images/{user_id}/{filename}"


# -------- Providers --------
def _generate_with_http_api(prompt: str):
    """Generic JSON image API: POST {prompt, width, height, n} -> {"images": [{"url": ...}]}."""
    config = current_app.config
    api_url = config.get("IMAGE_API_URL")
    if not api_url:
        raise ImageGenerationError("Image API is not configured")

    headers = {"Content-Type": "application/json"}
    if config.get("IMAGE_API_KEY"):
        headers["Authorization"] = f"Bearer {config['IMAGE_API_KEY']}"
    payload = {
        "prompt": prompt,
        "width": config.get("IMAGE_WIDTH", 1024),
        "height": config.get("IMAGE_HEIGHT", 768),
        "n": 1,
    }

    try:
        response = requests.post(api_url, json=payload, headers=headers, timeout=config.get("HTTP_TIMEOUT", 60))
    except RequestException as e:
        current_app.logger.error(f"[IMG] image API request failed: {e}")
        raise ImageGenerationError("Failed to generate image with image API") from e

    if not response.ok:
        current_app.logger.error(f"[IMG] image API returned {response.status_code}: {response.text[:300]}")
        raise ImageGenerationError("Failed to generate image with image API")

    try:
        data = response.json()
    except ValueError as e:
        raise ImageGenerationError("Failed to generate image") from e

    images = data.get("images") if isinstance(data, dict) else None
    if not images or not isinstance(images[0], dict):
        return None
    return images[0].get("url")


def _generate_with_openai(prompt: str, model: str | None):
    try:
        return generate_openai_image(prompt, model=model)
    except OpenAIError as e:
        current_app.logger.error(f"[OAI] image generation error: {e}", exc_info=True)
        raise ImageGenerationError("Failed to generate image with OpenAI") from e


def request_image(prompt: str, model: str | None = None):
    """Calls the configured provider once. Returns an image URL or raw bytes."""
    provider = current_app.config.get("IMAGE_PROVIDER", "openai")
    current_app.logger.info(f"Generating image with provider '{provider}'")
    if provider == "http":
        # the generic API has a single fixed model, 'model' is ignored
        result = _generate_with_http_api(prompt)
    elif provider == "openai":
        result = _generate_with_openai(prompt, model)
    else:
        raise ImageGenerationError(f"Unknown image provider '{provider}'")

    if not result:
        raise ImageGenerationError("Failed to generate image")
    return result


def download_image(url: str) -> bytes:
    try:
        response = requests.get(url, timeout=current_app.config.get("HTTP_TIMEOUT", 60))
    except RequestException as e:
        current_app.logger.error(f"[IMG] download failed for {url}: {e}")
        raise ImageGenerationError("Failed to download generated image") from e
    if not response.ok:
        current_app.logger.error(f"[IMG] download of {url} returned {response.status_code}")
        raise ImageGenerationError("Failed to download generated image")
    return response.content


# -------- Orchestration --------
def create_generated_image(prompt: str, user, model: str | None = None) -> GeneratedImage:
    """Generate, download, re-upload and persist. Raises ImageGenerationError on any failed step."""
    result = request_image(prompt, model=model)
    if isinstance(result, bytes):
        image_bytes = result
    else:
        current_app.logger.info(f"Generated image URL: {result}")
        image_bytes = download_image(result)

    key = build_image_key(user.id, build_image_filename(prompt))
    try:
        put_bytes(key, image_bytes, content_type="image/png")
    except (BotoCoreError, ClientError, RuntimeError) as e:
        current_app.logger.error(f"[IMG] upload failed for key={key}: {e}", exc_info=True)
        raise ImageGenerationError("Failed to upload image to storage") from e

    permanent_url = public_url(key)
    current_app.logger.info(f"Uploaded image to storage URL: {permanent_url}")

    try:
        image = GeneratedImage(url=permanent_url, prompt=prompt, user_id=user.id)
        db.session.add(image)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"[IMG] DB error saving image for user={user.id}: {e}", exc_info=True)
        raise ImageGenerationError("Failed to save generated image") from e

    current_app.logger.info(f"[IMG] ok image={image.id} user={user.id} key={key}")
    return image


def generate_image_for_user(prompt: str, user, model: str | None = None) -> dict:
    """Runs one generation attempt and reports it as {"success": ..., "image"|"error": ...}."""
    try:
        image = create_generated_image(prompt, user, model=model)
    except ImageGenerationError as e:
        return {"success": False, "error": str(e)}
    except Exception as e:
        current_app.logger.error(f"Error generating image: {e}", exc_info=True)
        return {"success": False, "error": "Failed to generate image"}
    return {"success": True, "image": image.to_dict()}
