"""
Shared GCS Client Utility

Lazily creates one google-cloud-storage client per GCP project, using the
application default credentials.
"""

import logging
import threading
from typing import Dict, Optional

from google.auth import default
from google.cloud import storage

logger = logging.getLogger(__name__)


class SharedGCSClient:
    """Process-wide cache of GCS clients, keyed by project"""

    _clients: Dict[Optional[str], storage.Client] = {}
    _lock = threading.Lock()

    @classmethod
    def get(cls, project: Optional[str] = None) -> storage.Client:
        """Return the client for project, creating it on first use"""
        with cls._lock:
            if project not in cls._clients:
                cls._clients[project] = cls._create_gcs_client(project)
            return cls._clients[project]

    @staticmethod
    def _create_gcs_client(project: Optional[str] = None) -> storage.Client:
        """Create a GCS client from default credentials"""
        try:
            credentials, default_project = default()
            client = storage.Client(credentials=credentials, project=project or default_project)
            logger.info(f"Shared GCS client created for project {client.project}")
            return client
        except Exception as e:
            logger.error(f"Failed to create GCS client: {e}")
            raise

    @classmethod
    def reset(cls):
        """Drop the cached clients (tests, credential rotation)"""
        with cls._lock:
            cls._clients.clear()


def get_shared_gcs_client(project: Optional[str] = None) -> storage.Client:
    """
    Get the shared GCS client for a project.

    Args:
        project: GCP project, defaults to the one of the credentials

    Returns:
        storage.Client: Process-wide GCS client for that project
    """
    return SharedGCSClient.get(project)
