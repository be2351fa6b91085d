"""
Project schema: validation and response shaping.
"""

from ...core.errors import ValidationError
from ...core.storage import public_url

CATEGORIES = ('Medical', 'Residential', 'Commercial')


def _required_text(data, field):
    value = data.get(field)
    if value is None:
        raise ValidationError(f'{field} is required', field)
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    if not value:
        raise ValidationError(f'{field} is required', field)
    return value


def validate_project(data):
    """Return a cleaned copy of title/description/category/images or raise ValidationError"""
    title = _required_text(data, 'title')
    description = _required_text(data, 'description')

    category = data.get('category')
    if category not in CATEGORIES:
        raise ValidationError(
            f'category must be one of {", ".join(CATEGORIES)}', 'category')

    images = data.get('images')
    if isinstance(images, str):
        images = [images]
    if not images:
        raise ValidationError('At least one image is required', 'images')
    if not all(isinstance(img, str) and img for img in images):
        raise ValidationError('Images must be non-empty strings', 'images')

    return {
        'title': title,
        'description': description,
        'category': category,
        'images': list(images),
    }


def serialize_project(project):
    """Project dict for API responses, upload paths turned into absolute URLs"""
    data = dict(project)
    data['images'] = [public_url(img) for img in data.get('images') or []]
    return data
