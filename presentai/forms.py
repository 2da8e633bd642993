# presentai/forms.py
from flask import current_app, request
from flask_wtf import FlaskForm
from wtforms import Field, StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Length, Email, ValidationError, StopValidation
from wtforms.widgets import TextInput, PasswordInput

from .models import User


# --- Styled input widget ---
# Plain <input> carrying the design-system classes used by the front end.
BASE_INPUT_CLASSES = "flex w-full px-4 py-3 text-sm text-foreground placeholder:text-secondary"
INPUT_VARIANT_CLASSES = {
    "default": "rounded-xl border border-border bg-background",
    "borderless": "border-none bg-transparent",
}
FOCUS_INPUT_CLASSES = "focus:outline-none focus:ring-2 focus:ring-primary focus:ring-offset-2"
DISABLED_INPUT_CLASSES = "disabled:cursor-not-allowed disabled:opacity-50"
FILE_INPUT_CLASSES = "file:border-0 file:bg-transparent file:text-sm file:font-medium"


def input_classes(variant="default", extra=None):
    if variant not in INPUT_VARIANT_CLASSES:
        raise ValueError(f"Unknown input variant '{variant}'")
    parts = [
        BASE_INPUT_CLASSES,
        INPUT_VARIANT_CLASSES[variant],
        FOCUS_INPUT_CLASSES,
        DISABLED_INPUT_CLASSES,
        FILE_INPUT_CLASSES,
    ]
    if extra:
        parts.append(extra)
    return " ".join(parts)


class StyledInputMixin:
    """Adds the variant classes to whatever input widget it is mixed into.

    ``field(variant="borderless", class_="w-1/2")`` picks the variant and
    appends caller classes.
    """
    def __init__(self, variant="default", **kwargs):
        super().__init__(**kwargs)
        self.variant = variant

    def __call__(self, field, **kwargs):
        variant = kwargs.pop("variant", self.variant)
        extra = kwargs.pop("class_", None) or kwargs.pop("class", None)
        kwargs["class"] = input_classes(variant, extra)
        return super().__call__(field, **kwargs)


class StyledTextInput(StyledInputMixin, TextInput):
    pass


class StyledPasswordInput(StyledInputMixin, PasswordInput):
    pass


# --- JSON payload helpers ---
def is_text(form, field):
    """Stops the chain for values that are present but not strings (numbers, lists...)."""
    if field.data is not None and not isinstance(field.data, str):
        raise StopValidation("Must be a string.")


def skip_if_blank(form, field):
    """Like wtforms' Optional, but looks at the decoded value since JSON forms carry no raw_data."""
    if field.data is None or (isinstance(field.data, str) and not field.data.strip()):
        field.errors[:] = []
        raise StopValidation()


def strip_text(value):
    return value.strip() if isinstance(value, str) else value


class JSONForm(FlaskForm):
    """Base for forms fed from a JSON object instead of form-encoded data.

    CSRF is enforced app-wide by CSRFProtect, not per form.
    """
    class Meta:
        csrf = False

    @classmethod
    def from_json(cls):
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return None
        return cls(formdata=None, data=payload)


class RawField(Field):
    """Keeps the decoded JSON value as-is (lists, objects)."""
    def process_data(self, value):
        self.data = value


# --- Auth forms ---
class RegistrationForm(JSONForm):
    """Form for user registration."""
    name = StringField('Name', widget=StyledTextInput(),
                       validators=[is_text, DataRequired(), Length(min=2, max=100)], filters=[strip_text])
    email = StringField('Email', widget=StyledTextInput(),
                        validators=[is_text, DataRequired(), Email()], filters=[strip_text])
    password = PasswordField('Password', widget=StyledPasswordInput(),
                             validators=[is_text, DataRequired(), Length(min=6)])

    def validate_email(self, email):
        """Check if email already exists in the database."""
        user = User.query.filter_by(email=email.data).first()
        if user:
            raise ValidationError('That email is already taken. Please choose a different one or login.')


class LoginForm(JSONForm):
    """Form for user login."""
    email = StringField('Email', widget=StyledTextInput(),
                        validators=[is_text, DataRequired(), Email()], filters=[strip_text])
    password = PasswordField('Password', widget=StyledPasswordInput(), validators=[is_text, DataRequired()])
    remember = BooleanField('Remember Me')


# --- Generation forms ---
class ImageGenerationForm(JSONForm):
    """Body of POST /api/images/generate."""
    prompt = StringField('Prompt', widget=StyledTextInput(),
                         validators=[is_text, DataRequired(), Length(max=4000)], filters=[strip_text])
    model = StringField('Model', widget=StyledTextInput(variant="borderless"),
                        validators=[skip_if_blank, is_text])

    def validate_model(self, model):
        allowed = current_app.config.get("ALLOWED_IMAGE_MODELS") or []
        if model.data and model.data not in allowed:
            raise ValidationError(f"Unsupported model. Choose one of: {', '.join(allowed)}.")


class PresentationRequestForm(JSONForm):
    """Body of POST /api/presentation/generate."""
    title = StringField('Title', validators=[is_text, DataRequired()])
    outline = RawField('Outline')
    language = StringField('Language', validators=[is_text, DataRequired()])
    tone = StringField('Tone', validators=[skip_if_blank, is_text])

    def validate_outline(self, outline):
        value = outline.data
        if isinstance(value, dict):
            slides = list(value.values())
        elif isinstance(value, list):
            slides = value
        else:
            raise ValidationError('Outline must be an array of slides.')
        if not slides:
            raise ValidationError('Outline must contain at least one slide.')
        for index, slide in enumerate(slides, start=1):
            if isinstance(slide, str):
                continue
            if isinstance(slide, dict) and isinstance(slide.get('title'), str):
                continue
            raise ValidationError(f'Slide {index} must be text or an object with a "title".')
