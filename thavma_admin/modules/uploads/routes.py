from flask import send_from_directory

from . import uploads_bp
from ...core.storage import get_upload_dir


@uploads_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    """Static image bytes; send_from_directory rejects paths outside the folder"""
    return send_from_directory(get_upload_dir(), filename)
