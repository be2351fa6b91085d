"""
Contact Routes
==============

- POST /api/contact                 visitor submission (no auth)
- GET  /api/contact                 list messages (token)
- PUT  /api/contact/<id>            change status (token)
- POST /api/contact/<id>/respond    email a reply (token)
"""

from flask import request, jsonify, g

from . import contact_bp
from .database import ContactDatabase
from .models import MessageStatus, is_forward_transition
from ..auth.utils import token_required
from ..email.email_service import email_service
from ...core.config import get_config_value
from ...core.errors import ValidationError
from ...core.logging_service import LoggingService


@contact_bp.route('/api/contact', methods=['POST'])
def submit_message():
    """Contact form submission"""
    try:
        data = request.get_json(silent=True) or request.form
        ContactDatabase.create(data)
        return jsonify({'message': 'Message sent successfully'}), 201
    except Exception as e:
        LoggingService.log_error_with_traceback('contact', e, {'route': 'submit_message'})
        return jsonify({'error': 'Failed to send message'}), 500


@contact_bp.route('/api/contact', methods=['GET'])
@token_required
def get_messages():
    """All contact messages, newest first"""
    try:
        return jsonify(ContactDatabase.get_all())
    except Exception as e:
        LoggingService.log_error_with_traceback('contact', e, {'route': 'get_messages'})
        return jsonify({'error': 'Failed to fetch messages'}), 500


@contact_bp.route('/api/contact/<int:message_id>', methods=['PUT'])
@token_required
def update_message_status(message_id):
    """Update message status"""
    try:
        data = request.get_json(silent=True) or {}

        current = ContactDatabase.get(message_id)
        if not current:
            return jsonify({'error': 'Message not found'}), 404

        # No status in the body leaves the message as it is
        if data.get('status') is None:
            return jsonify(current)
        new_status = MessageStatus.parse(data['status'])

        if not is_forward_transition(current['status'], new_status):
            if get_config_value('CONTACT_STRICT_STATUS', False):
                raise ValidationError(
                    f"status cannot move from {current['status']} to {new_status.value}", 'status')
            LoggingService.warning('contact', f"Message {message_id} status moved back",
                                   {'from': current['status'], 'to': new_status.value})

        message = ContactDatabase.update_status(message_id, new_status)
        if not message:
            return jsonify({'error': 'Message not found'}), 404
        return jsonify(message)
    except Exception as e:
        LoggingService.log_error_with_traceback('contact', e,
                                                {'route': 'update_message_status', 'message_id': message_id})
        return jsonify({'error': 'Failed to update message status'}), 500


@contact_bp.route('/api/contact/<int:message_id>/respond', methods=['POST'])
@token_required
def respond_to_message(message_id):
    """Email a reply, then record it on the message"""
    try:
        data = request.get_json(silent=True) or {}
        response_text = data.get('response')

        message = ContactDatabase.get(message_id)
        if not message:
            return jsonify({'error': 'Message not found'}), 404

        if not response_text or not isinstance(response_text, str):
            raise ValidationError('response is required', 'response')

        # Record the reply only once the relay has accepted it
        if not email_service.send_contact_response(message, response_text):
            LoggingService.error('contact', f"Reply to message {message_id} was not sent")
            return jsonify({'error': 'Failed to send email'}), 500

        ContactDatabase.mark_responded(message_id, response_text)
        LoggingService.log_user_action('contact', f"responded to message {message_id}",
                                       user_id=g.current_admin.get('id'))
        return jsonify({'message': 'Email sent successfully'})
    except Exception as e:
        LoggingService.log_error_with_traceback('contact', e,
                                                {'route': 'respond_to_message', 'message_id': message_id})
        return jsonify({'error': 'Failed to send email'}), 500
