"""Echo validation errors back into a rendered form.

Form templates place an error slot next to each control::

    <input name="login">
    <span class="error" data-error-for="login"></span>

plus a ``data-error-for="form"`` slot for errors that belong to no single
field. :func:`show_error` fills the slot and flags the control with
``aria-invalid``; :func:`clear_errors` resets every slot in the form.
"""

from waypoint.dom import Element
from waypoint.events import FieldError

ERROR_ATTRIBUTE = "data-error-for"
FORM_FIELD = "form"


def show_error(form: Element, field: str, message: str) -> None:
    """Show *message* in the error slot for *field*.

    Falls back to the form-level slot when the field has none.
    """
    slot = _slot(form, field) or _slot(form, FORM_FIELD)
    if slot is not None:
        slot.text_content = message

    control = form.elements.get(field)
    if control is not None:
        control.set_attribute("aria-invalid", "true")


def show_field_error(form: Element, error: FieldError) -> None:
    show_error(form, error.field, error.message)


def clear_errors(form: Element) -> None:
    """Empty every error slot and drop ``aria-invalid`` from every control."""
    for element in form.iter_descendants():
        if element.has_attribute(ERROR_ATTRIBUTE):
            element.text_content = ""
        element.remove_attribute("aria-invalid")


def error_messages(form: Element) -> dict[str, str]:
    """Currently displayed errors keyed by field name."""
    return {
        element.attributes[ERROR_ATTRIBUTE]: element.text_content
        for element in form.iter_descendants()
        if element.has_attribute(ERROR_ATTRIBUTE) and element.text_content
    }


def _slot(form: Element, field: str) -> Element | None:
    for element in form.iter_descendants():
        if element.attributes.get(ERROR_ATTRIBUTE) == field:
            return element
    return None
