#!/usr/bin/env python3
"""
Initialize MongoDB indexes used by the message store
"""
import asyncio
import os
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING

async def init_collections():
    mongodb_uri = os.getenv("MONGODB_URI", "mongodb://localhost:27017/graph_messaging")
    client = AsyncIOMotorClient(mongodb_uri)
    db = client.get_default_database()

    print("Initializing MongoDB indexes for graph messaging...")

    indexes = [
        ("messages", [("recipientId", ASCENDING), ("sentTime", ASCENDING)], "recipient_sent_index"),
        ("messages", [("senderId", ASCENDING), ("sentTime", ASCENDING)], "sender_sent_index"),
        ("messages", [("sentTime", DESCENDING)], "sentTime_index"),
    ]
    for collection, keys, name in indexes:
        try:
            await db[collection].create_index(keys, name=name)
            print(f"Created index {name} on {collection}")
        except Exception as e:
            print(f"Index {name} on {collection}: {e}")

    collections = await db.list_collection_names()
    print(f"\nAvailable collections: {collections}")

    print("\nIndexes on messages:")
    async for index in db["messages"].list_indexes():
        print(f"   - {index}")

    client.close()

if __name__ == "__main__":
    asyncio.run(init_collections())
