import os # os needs to be imported before dotenv for getenv to work as expected in some cases
from dotenv import load_dotenv
load_dotenv() # Load .env file at the very beginning

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from graph_messaging.db import init_db
from graph_messaging.routes import messages, health
import logging
from graph_messaging.middleware.error_handler import ErrorHandlerMiddleware, register_error_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Graph Messaging API",
    description="Private messages between users of a social graph: inbox, outbox, conversations and read receipts",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

@app.on_event("startup")
async def startup_event():
    logger.info("Application startup completed (store backend: %s)", os.getenv("MESSAGE_STORE", "mongo"))

# Explicit origin list is mandatory when allow_credentials=True.
# Multiple origins can be provided via the CORS_ORIGINS environment variable, comma-separated.
cors_origins_str = os.getenv("CORS_ORIGINS", "http://localhost:8080")
cors_origins = [origin.strip() for origin in cors_origins_str.split(",")]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add error handler middleware (after CORS so errors get CORS headers)
app.add_middleware(ErrorHandlerMiddleware)
register_error_handlers(app)

# Initialize Database
init_db(app)

app.include_router(health.router, tags=["Health"])

@app.get("/")
async def root():
    return {
        "message": "Welcome to Graph Messaging API",
        "docs": "/docs",
        "health": "/health"
    }

app.include_router(messages.router, prefix="/api/messages", tags=["Messages"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
