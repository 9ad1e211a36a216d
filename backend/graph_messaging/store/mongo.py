from datetime import datetime
from typing import List

from graph_messaging.errors import NotFound
from graph_messaging.models.message import EdgeRef, MessageEdge
from graph_messaging.models.user import UserNode
from graph_messaging.store.base import MessageStore
from graph_messaging.utils.identifiers import new_id

USERS = "users"
MESSAGES = "messages"


class MongoMessageStore(MessageStore):
    """MessageStore backed by a Motor database.

    Users live in ``users`` and message edges in ``messages``; both are keyed
    by their 32-hex id stored directly as ``_id``.
    """

    def __init__(self, db):
        self.db = db

    async def ping(self) -> None:
        await self.db.command("ping")

    async def resolve_node(self, node_id: str) -> UserNode:
        doc = await self.db[USERS].find_one({"_id": node_id})
        if not doc:
            raise NotFound("node", node_id)
        return UserNode(**doc)

    async def create_message_edge(self, sender_id: str, recipient_id: str, content: str) -> MessageEdge:
        edge = MessageEdge(
            id=new_id(),
            senderId=sender_id,
            recipientId=recipient_id,
            content=content,
            sentTime=datetime.utcnow(),
        )
        await self.db[MESSAGES].insert_one(edge.to_document())
        return edge

    async def resolve_edge(self, edge_id: str) -> MessageEdge:
        doc = await self.db[MESSAGES].find_one({"_id": edge_id})
        if not doc:
            raise NotFound("message", edge_id)
        return MessageEdge(**doc)

    async def set_edge_read_flag(self, edge_id: str) -> None:
        # $set to a constant, so concurrent receipts converge on true
        res = await self.db[MESSAGES].update_one({"_id": edge_id}, {"$set": {"isRead": True}})
        if res.matched_count == 0:
            raise NotFound("message", edge_id)

    async def list_incoming_edges(self, node_id: str) -> List[MessageEdge]:
        cursor = self.db[MESSAGES].find({"recipientId": node_id}).sort("sentTime", 1)
        return [MessageEdge(**doc) for doc in await cursor.to_list(None)]

    async def list_outgoing_edges(self, node_id: str) -> List[MessageEdge]:
        cursor = self.db[MESSAGES].find({"senderId": node_id}).sort("sentTime", 1)
        return [MessageEdge(**doc) for doc in await cursor.to_list(None)]

    async def query_edges_between(self, node_a: str, node_b: str) -> List[EdgeRef]:
        filter_dict = {
            "$or": [
                {"senderId": node_a, "recipientId": node_b},
                {"senderId": node_b, "recipientId": node_a},
            ]
        }
        projection = {"senderId": 1, "content": 1, "sentTime": 1}
        cursor = self.db[MESSAGES].find(filter_dict, projection).sort("sentTime", -1)
        return [
            EdgeRef(str(doc["_id"]), doc["senderId"], doc.get("content", ""), doc["sentTime"])
            for doc in await cursor.to_list(None)
        ]
