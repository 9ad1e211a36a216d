from fastapi import APIRouter, Depends, HTTPException
from datetime import datetime
from graph_messaging.db import get_store

router = APIRouter()

@router.get("/health")
async def health_check(store=Depends(get_store)):
    """
    Basic health check endpoint for production monitoring
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": "1.0.0",
        "checks": {}
    }

    # Message store connectivity check
    try:
        await store.ping()
        health_status["checks"]["store"] = {"status": "healthy"}
    except Exception as e:
        health_status["checks"]["store"] = {"status": "unhealthy", "error": str(e)}
        health_status["status"] = "degraded"

    return health_status

@router.get("/health/ready")
async def readiness_check(store=Depends(get_store)):
    """
    Kubernetes readiness probe endpoint
    """
    try:
        await store.ping()
    except Exception as e:
        raise HTTPException(
            status_code=503,
            detail={
                "status": "not_ready",
                "timestamp": datetime.utcnow().isoformat(),
                "error": str(e)
            }
        )
    return {
        "status": "ready",
        "timestamp": datetime.utcnow().isoformat()
    }

@router.get("/health/live")
async def liveness_check():
    """
    Kubernetes liveness probe endpoint
    """
    return {
        "status": "alive",
        "timestamp": datetime.utcnow().isoformat()
    }
