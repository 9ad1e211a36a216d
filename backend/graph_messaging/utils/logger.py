import logging
from datetime import datetime
from graph_messaging.db import get_db
from typing import Dict, Any, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

async def log_event(
    action: str,
    details: Optional[Dict[str, Any]] = None,
    user_id: Optional[str] = None,
):
    """
    Log an event to the application logger and, when MongoDB is configured,
    to the activity_logs collection
    """
    try:
        log_message = f"Action: {action}"
        if user_id:
            log_message += f" | User: {user_id}"
        if details:
            log_message += f" | Details: {details}"

        logger.info(log_message)

        db = get_db()
        if db is None:
            return
        log_entry = {
            "action": action,
            "details": details or {},
            "userId": user_id,
            "timestamp": datetime.utcnow(),
        }

        await db["activity_logs"].insert_one(log_entry)

    except Exception as e:
        # Don't let logging errors break the application
        logger.error(f"Failed to log event: {e}")

def log_error(message: str, error: Exception, user_id: Optional[str] = None):
    """
    Log an error with context
    """
    error_message = f"Error: {message} | Exception: {str(error)}"
    if user_id:
        error_message += f" | User: {user_id}"

    logger.error(error_message)

def log_warning(message: str, user_id: Optional[str] = None):
    warning_message = f"Warning: {message}"
    if user_id:
        warning_message += f" | User: {user_id}"

    logger.warning(warning_message)

# Event type constants for consistency
class EventTypes:
    MESSAGE_SENT = "message_sent"
    ANONYMOUS_MESSAGE_SENT = "anonymous_message_sent"
    MESSAGE_READ = "message_read"
    CONVERSATION_READ = "conversation_read"
    NOTIFICATION_FAILED = "notification_failed"
