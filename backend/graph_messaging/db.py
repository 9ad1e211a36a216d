import os
from motor.motor_asyncio import AsyncIOMotorClient
from graph_messaging.store.memory import InMemoryMessageStore
from graph_messaging.store.mongo import MongoMessageStore

# MongoDB Setup
client = None
db = None
_memory_store = None

def _store_backend() -> str:
    return os.getenv("MESSAGE_STORE", "mongo").lower()

def init_db(app):
    global client, db
    if _store_backend() == "memory":
        app.state.db = None
        return
    MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/graph_messaging")
    client = AsyncIOMotorClient(MONGODB_URI)
    db = client.get_default_database()
    app.state.db = db

def get_db():
    return db

def get_store():
    """Message store for the configured backend (MESSAGE_STORE=mongo|memory)."""
    global _memory_store
    if _store_backend() == "memory":
        if _memory_store is None:
            _memory_store = InMemoryMessageStore()
        return _memory_store
    return MongoMessageStore(get_db())
