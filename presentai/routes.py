# presentai/routes.py
import os

from flask import Blueprint, current_app, jsonify, abort, request, Response, stream_with_context
from flask_login import login_user, current_user, logout_user, login_required
from flask_wtf.csrf import generate_csrf
from botocore.exceptions import ClientError

from . import db, csrf, login_manager
from .models import User, GeneratedImage
from .forms import RegistrationForm, LoginForm, ImageGenerationForm, PresentationRequestForm
from .images import generate_image_for_user
from .openai_helpers import stream_presentation_text
from .prompts import render_slides_prompt
from .storage import get_object

main = Blueprint('main', __name__)

# Endpoints reachable without a session
PUBLIC_ENDPOINTS = {"main.csrf_token", "main.register", "main.login"}


@main.before_request
def authenticate_then_protect():
    """Anonymous calls to protected endpoints get 401 before the CSRF token is checked."""
    if request.method == "OPTIONS":
        return None
    if request.endpoint not in PUBLIC_ENDPOINTS and not current_user.is_authenticated:
        return login_manager.unauthorized()
    if current_app.config.get("WTF_CSRF_ENABLED", True):
        csrf.protect()


def _validation_error(form, message="Invalid request body"):
    details = form.errors if form is not None else {"body": ["Expected a JSON object."]}
    return jsonify(error=message, details=details), 400


# --- Serving files from S3/MinIO ---
@main.route("/files/<path:key>")
@login_required
def serve_s3_file(key):
    """
    Streams a stored object to its owner.
    Keys look like "images/{user_id}/{filename}".
    """
    parts = key.split('/')
    if len(parts) < 3 or parts[0] != 'images' or not parts[1].isdigit():
        current_app.logger.error(f"Invalid key format for S3 proxy access: {key}")
        abort(400)
    if int(parts[1]) != current_user.id:
        current_app.logger.warning(f"User {current_user.id} attempted to access unauthorized S3 key: {key}")
        abort(403)

    try:
        obj = get_object(key)
        return Response(
            obj["Body"].read(),
            mimetype=obj.get("ContentType", "application/octet-stream"),
            headers={"Content-Disposition": f"inline; filename={os.path.basename(key)}"}
        )
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") == "NoSuchKey":
            current_app.logger.warning(f"S3 file not found for key: {key}")
            return jsonify(error="File not found"), 404
        current_app.logger.error(f"S3 error serving '{key}': {e}")
        return jsonify(error="Error serving file"), 500
    except Exception as e:
        current_app.logger.error(f"Generic error serving S3 file '{key}': {e}", exc_info=True)
        return jsonify(error="Internal server error"), 500


# --- User Authentication & Account Routes ---
@main.route('/api/auth/csrf-token')
def csrf_token():
    """Token for the X-CSRFToken header of subsequent POSTs."""
    return jsonify(csrf_token=generate_csrf())


@main.route('/api/auth/register', methods=['POST'])
def register():
    form = RegistrationForm.from_json()
    if form is None or not form.validate():
        current_app.logger.warning(f"Registration validation failed: {form.errors if form else 'no JSON body'}")
        return _validation_error(form)

    new_user = User(name=form.name.data, email=form.email.data)
    new_user.set_password(form.password.data)
    try:
        db.session.add(new_user)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Registration Error: {e}', exc_info=True)
        return jsonify(error="An error occurred during registration. Please try again."), 500

    current_app.logger.info(f"Registered user {new_user.id}")
    return jsonify(user=new_user.to_dict()), 201


@main.route('/api/auth/login', methods=['POST'])
def login():
    form = LoginForm.from_json()
    if form is None or not form.validate():
        return _validation_error(form)

    user = User.query.filter_by(email=form.email.data).first()
    if user and user.check_password(form.password.data):
        login_user(user, remember=form.remember.data)
        current_app.logger.info(f"User {user.id} logged in")
        return jsonify(user=user.to_dict())

    current_app.logger.info(f"Failed login for '{form.email.data}'")
    return jsonify(error="Login unsuccessful. Please check email and password."), 401


@main.route('/api/auth/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify(message="You have been logged out.")


@main.route('/api/auth/me')
@login_required
def me():
    return jsonify(user=current_user.to_dict())


# --- Image Generation Routes ---
@main.route('/api/images/generate', methods=['POST'])
@login_required
def generate_image_api():
    form = ImageGenerationForm.from_json()
    if form is None or not form.validate():
        return _validation_error(form)

    result = generate_image_for_user(form.prompt.data, current_user, model=form.model.data or None)
    if not result["success"]:
        current_app.logger.warning(f"Image generation failed for user {current_user.id}: {result['error']}")
        return jsonify(result), 500
    return jsonify(result)


@main.route('/api/images')
@login_required
def list_images_api():
    images = current_user.images.order_by(GeneratedImage.created_at.desc(), GeneratedImage.id.desc()).all()
    return jsonify(images=[image.to_dict() for image in images])


# --- Presentation Generation Routes ---
@main.route('/api/presentation/generate', methods=['POST'])
@login_required
def generate_presentation_api():
    form = PresentationRequestForm.from_json()
    if form is None or not form.validate():
        return _validation_error(form, message="Missing required fields")

    try:
        prompt = render_slides_prompt(
            title=form.title.data,
            outline=form.outline.data,
            language=form.language.data,
            tone=form.tone.data,
        )
        text_stream = stream_presentation_text(prompt)
    except Exception as e:
        current_app.logger.error(f"Error in presentation generation: {e}", exc_info=True)
        return jsonify(error="Failed to generate presentation slides"), 500

    user_id = current_user.id

    def relay():
        try:
            yield from text_stream
        except Exception as e:
            # headers are already sent; the client sees a truncated body
            current_app.logger.error(f"Presentation stream for user {user_id} aborted: {e}", exc_info=True)

    return Response(stream_with_context(relay()), mimetype="text/plain",
                    headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"})
