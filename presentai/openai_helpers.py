# presentai/openai_helpers.py
import os
import base64
from datetime import datetime

from flask import current_app

from openai import OpenAI, OpenAIError


# -------- Client --------
def get_openai_client():
    """Initializes and returns the OpenAI client."""
    api_key = current_app.config.get("OPENAI_API_KEY")
    if not api_key:
        current_app.logger.error("OpenAI API key not configured.")
        raise ValueError("OpenAI API key not configured.")
    try:
        # one attempt per call, failures surface to the caller
        client = OpenAI(api_key=api_key, timeout=current_app.config.get("OPENAI_TIMEOUT", 120.0), max_retries=0)
        return client
    except Exception as e:
        current_app.logger.error(f"Failed to initialize OpenAI client: {e}", exc_info=True)
        raise ValueError(f"Failed to initialize OpenAI client: {e}")


def _get_text_model_default() -> str:
    return current_app.config.get("OPENAI_TEXT_MODEL", "gpt-4o-mini")


def _get_image_model_default() -> str:
    return current_app.config.get("OPENAI_IMAGE_MODEL", "dall-e-3")


# -------- Prompt logging --------
def log_prompt_to_file(log_type, prompt_data):
    """Appends prompt data to the configured log file."""
    log_file_path = current_app.config.get("PROMPT_LOG_FILE")
    if not log_file_path:
        return
    try:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        log_entry = f"--- {log_type} Log Entry [{timestamp}] ---\n"
        if isinstance(prompt_data, dict):
            for key, value in prompt_data.items():
                log_entry += f"{key}:\n{value}\n\n"
        else:
            log_entry += f"{prompt_data}\n\n"
        log_entry += "---\n\n"
        log_dir = os.path.dirname(log_file_path)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        with open(log_file_path, "a", encoding="utf-8") as f:
            f.write(log_entry)
    except Exception as e:
        current_app.logger.error(f"Error during prompt logging: {e}", exc_info=True)


# -------- Presentation text (streaming) --------
def stream_presentation_text(prompt: str):
    """
    Opens a streaming chat completion for the rendered slides prompt.

    The request is sent eagerly so connection and auth failures raise here,
    before any response bytes go out. Returns an iterator of text deltas.
    """
    client = get_openai_client()
    text_model = _get_text_model_default()
    temperature = current_app.config.get("OPENAI_TEXT_TEMPERATURE", 0.7)

    log_prompt_to_file(
        "Presentation Generation Request",
        {"Model": text_model, "Temperature": temperature, "Prompt": prompt},
    )

    try:
        current_app.logger.info(f"Requesting streamed presentation from model '{text_model}'")
        stream = client.chat.completions.create(
            model=text_model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            stream=True,
        )
    except OpenAIError as e:
        current_app.logger.error(f"OpenAI API Error during presentation generation: {e}")
        raise ConnectionError("An error occurred communicating with OpenAI API.") from e

    return iter_stream_text(stream)


def iter_stream_text(stream):
    """Yields the non-empty content deltas of a chat completion stream, unmodified."""
    for chunk in stream:
        if not chunk.choices:
            continue
        delta = chunk.choices[0].delta
        content = getattr(delta, "content", None) if delta is not None else None
        if content:
            yield content


# -------- Image generation --------
def generate_openai_image(prompt: str, model: str | None = None):
    """
    Generates one image with the OpenAI Images API.

    Returns the hosted image URL (str) or, for models that answer with
    base64 payloads, the decoded PNG bytes.
    """
    client = get_openai_client()
    image_model = model or _get_image_model_default()
    size = current_app.config.get("OPENAI_IMAGE_SIZE", "1024x1024")

    log_prompt_to_file("Image Generation Request", {"Model": image_model, "Size": size, "Prompt": prompt})
    current_app.logger.info(f"[OAI] images.generate start (model={image_model}, size={size})")

    result = client.images.generate(model=image_model, prompt=prompt, size=size, n=1)
    current_app.logger.info("[OAI] images.generate done")

    if not result.data:
        return None
    image = result.data[0]
    if getattr(image, "url", None):
        return image.url
    if getattr(image, "b64_json", None):
        return base64.b64decode(image.b64_json)
    return None
