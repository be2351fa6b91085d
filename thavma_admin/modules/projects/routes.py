"""
Projects Routes
===============

Public listing plus token-protected create/update/delete.
Create and update accept multipart forms (with up to 10 image files in the
`images` field) or JSON bodies whose `images` holds existing paths/URLs.
"""

from flask import request, jsonify, g

from . import projects_bp
from .database import ProjectDatabase
from .models import serialize_project
from ..auth.utils import token_required
from ...core.logging_service import LoggingService
from ...core.storage import save_uploaded_images, resolve_images


def _project_payload():
    """Collect title/description/category/images from a multipart or JSON request"""
    if request.mimetype == 'multipart/form-data' or request.form:
        data = request.form
        submitted = data.getlist('images') or data.getlist('images[]')
    else:
        data = request.get_json(silent=True) or {}
        submitted = data.get('images')

    # Raises UploadError before writing if any file is rejected
    uploaded = save_uploaded_images(request.files.getlist('images'), field_name='images')

    return {
        'title': data.get('title'),
        'description': data.get('description'),
        'category': data.get('category'),
        'images': resolve_images(uploaded, submitted),
    }


@projects_bp.route('/api/projects', methods=['GET'])
def get_projects():
    """Get all projects, newest first"""
    try:
        projects = ProjectDatabase.get_all()
        return jsonify([serialize_project(p) for p in projects])
    except Exception as e:
        LoggingService.log_error_with_traceback('projects', e, {'route': 'get_projects'})
        return jsonify({'error': 'Failed to fetch projects'}), 500


@projects_bp.route('/api/projects', methods=['POST'])
@token_required
def create_project():
    """Create new project"""
    try:
        project = ProjectDatabase.create(_project_payload())
        LoggingService.log_user_action('projects', f"created project {project['id']}",
                                       user_id=g.current_admin.get('id'))
        return jsonify(serialize_project(project)), 201
    except Exception as e:
        LoggingService.log_error_with_traceback('projects', e, {'route': 'create_project'})
        return jsonify({'error': 'Failed to create project'}), 500


@projects_bp.route('/api/projects/<int:project_id>', methods=['PUT'])
@token_required
def update_project(project_id):
    """Replace a project's fields"""
    try:
        project = ProjectDatabase.update(project_id, _project_payload())
        if not project:
            return jsonify({'error': 'Project not found'}), 404
        return jsonify(serialize_project(project))
    except Exception as e:
        LoggingService.log_error_with_traceback('projects', e,
                                                {'route': 'update_project', 'project_id': project_id})
        return jsonify({'error': 'Failed to update project'}), 500


@projects_bp.route('/api/projects/<int:project_id>', methods=['DELETE'])
@token_required
def delete_project(project_id):
    """Delete project; uploaded files stay on disk"""
    try:
        if not ProjectDatabase.delete(project_id):
            return jsonify({'error': 'Project not found'}), 404
        LoggingService.log_user_action('projects', f"deleted project {project_id}",
                                       user_id=g.current_admin.get('id'))
        return jsonify({'message': 'Project deleted successfully'})
    except Exception as e:
        LoggingService.log_error_with_traceback('projects', e,
                                                {'route': 'delete_project', 'project_id': project_id})
        return jsonify({'error': 'Failed to delete project'}), 500
