"""
Storage Utility
===============

Local image uploads for project records.

Stored records keep server-relative paths (/uploads/<filename>); responses
turn them into absolute URLs with SERVER_URL.
"""

import os
import random
import time

from .config import get_config_value
from .errors import UploadError

UPLOAD_PREFIX = '/uploads/'


def get_upload_dir():
    """Absolute path of the upload folder, created on demand"""
    upload_dir = os.path.abspath(get_config_value('UPLOAD_FOLDER', 'uploads'))
    os.makedirs(upload_dir, exist_ok=True)
    return upload_dir


def _file_size(file):
    """Size of a werkzeug FileStorage without consuming it"""
    stream = file.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def generate_filename(field_name, original_filename):
    """<field>-<millisecond-timestamp>-<random-int><.ext>"""
    ext = os.path.splitext(original_filename or '')[1]
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}"
    return f"{field_name}-{unique_suffix}{ext}"


def validate_image_files(files):
    """Check count, MIME type and size of every file; raise UploadError on the first bad one"""
    max_files = int(get_config_value('MAX_UPLOAD_FILES', 10))
    max_size = int(get_config_value('MAX_UPLOAD_SIZE', 5 * 1024 * 1024))

    if len(files) > max_files:
        raise UploadError(f'Too many files: at most {max_files} images per request')

    for file in files:
        mimetype = file.mimetype or ''
        if not mimetype.startswith('image/'):
            raise UploadError('Only image files are allowed')
        if _file_size(file) > max_size:
            raise UploadError(f'File too large: {file.filename}')


def save_uploaded_images(files, field_name='images'):
    """Validate then write uploaded images.

    Args:
        files: List of werkzeug FileStorage objects (request.files.getlist).
        field_name: Form field the files came from, used as filename prefix.

    Returns:
        List of server-relative paths like "/uploads/images-1700000000000-42.jpg",
        in upload order.
    """
    files = [f for f in files if f and f.filename]
    if not files:
        return []

    # Reject before anything touches the disk
    validate_image_files(files)

    upload_dir = get_upload_dir()
    paths = []
    for file in files:
        filename = generate_filename(field_name, file.filename)
        file.save(os.path.join(upload_dir, filename))
        paths.append(f"{UPLOAD_PREFIX}{filename}")
    return paths


def resolve_images(uploaded_paths, submitted_images):
    """Uploaded files win; otherwise pass submitted path/URL strings through unchanged"""
    if uploaded_paths:
        return list(uploaded_paths)
    if submitted_images:
        if isinstance(submitted_images, (list, tuple)):
            return list(submitted_images)
        return [submitted_images]
    return []


def public_url(path):
    """Prefix server-relative upload paths with SERVER_URL; leave external URLs alone"""
    if isinstance(path, str) and path.startswith(UPLOAD_PREFIX):
        server_url = get_config_value('SERVER_URL', 'http://localhost:3001').rstrip('/')
        return f"{server_url}{path}"
    return path
