"""Forms for the game blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, ValidationError
from wtforms.validators import DataRequired


class ApiForm(FlaskForm):
    """Base form for token-authenticated JSON or form posts."""

    class Meta:
        csrf = False


def _require_text(field):
    # JSON bodies reach the field unconverted.
    if not isinstance(field.data, str):
        raise ValidationError(f"{field.label.text} must be text.")


class BoardForm(ApiForm):
    """Form for creating a board from one item per line."""

    items = TextAreaField("Items (one per line)", validators=[DataRequired()])

    def validate_items(self, field):
        """Reject non-text item lists."""
        _require_text(field)


class RenameForm(ApiForm):
    """Form for changing the caller's display name."""

    name = StringField("Display Name", validators=[DataRequired()])

    def validate_name(self, field):
        """Reject non-text names."""
        _require_text(field)
