"""Hosted document store backed by Cloud Firestore.

Credentials come from a service account file (path read from the env var
named in the firebase config) or from Application Default Credentials.
"""

from __future__ import annotations

from typing import Any

import structlog
from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from studyhub.db.store import StoredDocument, StoreError

logger = structlog.get_logger(__name__)


class FirestoreDocumentStore:
    """Document store over Firestore collections."""

    def __init__(
        self,
        project_id: str | None = None,
        credentials_path: str | None = None,
        client: firestore.Client | None = None,
    ):
        if client is not None:
            self.client = client
        elif credentials_path:
            self.client = firestore.Client.from_service_account_json(
                credentials_path, project=project_id
            )
        else:
            self.client = firestore.Client(project=project_id)

        logger.info("firestore.connected", project_id=project_id)

    def list_documents(self, collection: str) -> list[StoredDocument]:
        """List every document in a collection."""
        try:
            snapshots = list(self.client.collection(collection).stream())
        except google_exceptions.GoogleAPICallError as e:
            raise StoreError("list", collection, str(e)) from e

        logger.debug("firestore.listed", collection=collection, count=len(snapshots))
        return [_snapshot_to_document(s) for s in snapshots]

    def get_document(self, collection: str, doc_id: str) -> StoredDocument | None:
        """Get a document by ID, or None if absent."""
        try:
            snapshot = self.client.collection(collection).document(doc_id).get()
        except google_exceptions.GoogleAPICallError as e:
            raise StoreError("get", collection, str(e)) from e

        if not snapshot.exists:
            return None
        return _snapshot_to_document(snapshot)

    def create_document(self, collection: str, fields: dict[str, Any]) -> str:
        """Add a document with an auto-generated ID."""
        try:
            _, doc_ref = self.client.collection(collection).add(fields)
        except google_exceptions.GoogleAPICallError as e:
            raise StoreError("create", collection, str(e)) from e

        logger.info("firestore.created", collection=collection, doc_id=doc_ref.id)
        return doc_ref.id

    def update_document(self, collection: str, doc_id: str, fields: dict[str, Any]) -> bool:
        """Update fields on an existing document. False if it doesn't exist."""
        try:
            self.client.collection(collection).document(doc_id).update(fields)
        except google_exceptions.NotFound:
            return False
        except google_exceptions.GoogleAPICallError as e:
            raise StoreError("update", collection, str(e)) from e

        logger.info("firestore.updated", collection=collection, doc_id=doc_id)
        return True

    def delete_document(self, collection: str, doc_id: str) -> bool:
        """Delete a document. False if it doesn't exist.

        Firestore deletes are idempotent, so existence is checked first.
        """
        doc_ref = self.client.collection(collection).document(doc_id)
        try:
            if not doc_ref.get().exists:
                return False
            doc_ref.delete()
        except google_exceptions.GoogleAPICallError as e:
            raise StoreError("delete", collection, str(e)) from e

        logger.info("firestore.deleted", collection=collection, doc_id=doc_id)
        return True


def _snapshot_to_document(snapshot) -> StoredDocument:
    """Convert a Firestore DocumentSnapshot to a StoredDocument."""
    return StoredDocument.from_fields(snapshot.id, snapshot.to_dict() or {})
