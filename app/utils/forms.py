# Request Field Parsing
import json

from flask import request

from app.utils.errors import ValidationError

TRUE_VALUES = ('true', '1', 'yes', 'on')
FALSE_VALUES = ('false', '0', 'no', 'off', '')


def request_data():
    """Form fields for multipart/urlencoded requests, the JSON object otherwise."""
    if request.form:
        return request.form.to_dict()
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def clean_str(value):
    if value is None:
        return None
    return str(value).strip()


def require_fields(data, fields):
    missing = [field for field in fields if is_blank(data.get(field))]
    if missing:
        raise ValidationError(f'Missing required fields: {", ".join(missing)}', details={'fields': missing})


def parse_float(value, field, minimum=0):
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f'{field} must be a number', details={'field': field, 'reason': str(e)})
    if number != number or number in (float('inf'), float('-inf')):
        raise ValidationError(f'{field} must be a finite number', details={'field': field})
    if minimum is not None and number < minimum:
        raise ValidationError(f'{field} must not be less than {minimum}', details={'field': field})
    return number


def parse_int(value, field, minimum=0):
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a whole number', details={'field': field})
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError) as e:
        raise ValidationError(f'{field} must be a whole number', details={'field': field, 'reason': str(e)})
    # 10 and 10.0 are the same quantity
    if not number.is_integer():
        raise ValidationError(f'{field} must be a whole number', details={'field': field})
    number = int(number)
    if minimum is not None and number < minimum:
        raise ValidationError(f'{field} must not be less than {minimum}', details={'field': field})
    return number


def parse_bool(value, field):
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValidationError(f'{field} must be true or false', details={'field': field})


def parse_json_object(value, field, allowed_keys=None):
    """Accept a dict or its JSON text form; multipart clients send sub-objects as strings."""
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError as e:
            raise ValidationError(f'{field} must be valid JSON', details={'field': field, 'reason': str(e)})
    if not isinstance(value, dict):
        raise ValidationError(f'{field} must be an object', details={'field': field})
    if allowed_keys is not None:
        unknown = sorted(set(value) - set(allowed_keys))
        if unknown:
            raise ValidationError(f'Unknown {field} fields: {", ".join(unknown)}', details={'field': field, 'unknown': unknown})
    return value


def parse_choice(value, field, choices):
    if value not in choices:
        raise ValidationError(f'{field} must be one of: {", ".join(choices)}', details={'field': field, 'choices': list(choices)})
    return value
