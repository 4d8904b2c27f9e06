"""AWS Lambda entry point serving the ordering API through API Gateway.

The FastAPI application is built once per Lambda container when ``main`` is
imported; the Mangum adapter translates API Gateway events into ASGI requests.
"""

import logging
import os
from typing import Any

from mangum import Mangum

from main import app

logger = logging.getLogger(__name__)

# lifespan off: containers are frozen between invocations rather than shut down
if os.getenv("ENVIRONMENT") != "test":
    mangum_handler = Mangum(app, lifespan="off")
else:
    mangum_handler = None  # type: ignore


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle an API Gateway request.

    Args:
        event: The API Gateway event payload
        context: The Lambda context object

    Returns:
        API Gateway response dict
    """
    logger.info(f"Received Lambda invocation, request_id: {getattr(context, 'aws_request_id', None)}")

    try:
        result: dict[str, Any] = mangum_handler(event, context)
        return result
    except Exception as e:
        logger.exception(f"Unhandled error in Lambda handler: {e}")
        return {
            "statusCode": 500,
            "headers": {"content-type": "application/json"},
            "body": '{"code": 500, "data": null, "msg": "Internal server error"}',
        }
