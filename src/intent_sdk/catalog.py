"""Built-in operation catalog for the authoring service.

Paths are relative to the configured endpoint base. Placeholders are filled
from the resolved configuration (``app_id``, ``version_id``) and from
command-line options (``--intent-id`` becomes ``intent_id``).
"""

from __future__ import annotations

from typing import Any

DEFAULT_MANIFEST: dict[str, dict[str, dict[str, Any]]] = {
    "apps": {
        "list": {
            "name": "listApplications",
            "method": "GET",
            "path": "/apps",
            "query": ["skip", "take"],
            "description": "List applications owned by the authoring key",
        },
        "get": {
            "name": "getApplication",
            "method": "GET",
            "path": "/apps/{app_id}",
            "description": "Show application details",
        },
        "add": {
            "name": "addApplication",
            "method": "POST",
            "path": "/apps",
            "entity_name": "applicationCreateObject",
            "entity_type": "ApplicationCreateObject",
            "description": "Create a new application",
        },
        "update": {
            "name": "renameApplication",
            "method": "PUT",
            "path": "/apps/{app_id}",
            "entity_name": "applicationUpdateObject",
            "entity_type": "ApplicationUpdateObject",
            "description": "Rename or re-describe an application",
        },
        "delete": {
            "name": "deleteApplication",
            "method": "DELETE",
            "path": "/apps/{app_id}",
            "description": "Delete an application",
        },
        "publish": {
            "name": "publishApplication",
            "method": "POST",
            "path": "/apps/{app_id}/publish",
            "entity_name": "applicationPublishObject",
            "entity_type": "ApplicationPublishObject",
            "description": "Publish a version to a slot",
        },
    },
    "versions": {
        "list": {
            "name": "listVersions",
            "method": "GET",
            "path": "/apps/{app_id}/versions",
            "query": ["skip", "take"],
            "description": "List versions of the application",
        },
        "export": {
            "name": "exportVersion",
            "method": "GET",
            "path": "/apps/{app_id}/versions/{version_id}/export",
            "description": "Export a version as a document",
        },
        "import": {
            "name": "importVersion",
            "method": "POST",
            "path": "/apps/{app_id}/versions/import",
            "entity_name": "appDefinition",
            "entity_type": "AppDefinition",
            "query": ["version_id"],
            "description": "Import a version from an exported document",
        },
        "clone": {
            "name": "cloneVersion",
            "method": "POST",
            "path": "/apps/{app_id}/versions/{version_id}/clone",
            "entity_name": "taskUpdateObject",
            "entity_type": "TaskUpdateObject",
            "description": "Clone the version under a new id",
        },
        "delete": {
            "name": "deleteVersion",
            "method": "DELETE",
            "path": "/apps/{app_id}/versions/{version_id}",
            "description": "Delete a version",
        },
    },
    "intents": {
        "list": {
            "name": "listIntents",
            "method": "GET",
            "path": "/apps/{app_id}/versions/{version_id}/intents",
            "query": ["skip", "take"],
            "description": "List intent classifiers",
        },
        "add": {
            "name": "addIntent",
            "method": "POST",
            "path": "/apps/{app_id}/versions/{version_id}/intents",
            "entity_name": "intentCreateObject",
            "entity_type": "ModelCreateObject",
            "description": "Add an intent classifier",
        },
        "delete": {
            "name": "deleteIntent",
            "method": "DELETE",
            "path": "/apps/{app_id}/versions/{version_id}/intents/{intent_id}",
            "description": "Delete an intent classifier",
        },
    },
    "examples": {
        "list": {
            "name": "listExamples",
            "method": "GET",
            "path": "/apps/{app_id}/versions/{version_id}/examples",
            "query": ["skip", "take"],
            "description": "List labeled example utterances",
        },
        "add": {
            "name": "addExample",
            "method": "POST",
            "path": "/apps/{app_id}/versions/{version_id}/example",
            "entity_name": "exampleLabelObject",
            "entity_type": "ExampleLabelObject",
            "description": "Add a labeled example utterance",
        },
        "batch": {
            "name": "addExamples",
            "method": "POST",
            "path": "/apps/{app_id}/versions/{version_id}/examples",
            "entity_name": "exampleLabelObjectArray",
            "entity_type": "ExampleLabelObject[]",
            "description": "Add a batch of labeled example utterances",
        },
    },
    "train": {
        "start": {
            "name": "trainVersion",
            "method": "POST",
            "path": "/apps/{app_id}/versions/{version_id}/train",
            "description": "Queue the version for training",
        },
        "status": {
            "name": "getTrainingStatus",
            "method": "GET",
            "path": "/apps/{app_id}/versions/{version_id}/train",
            "description": "Show per-model training status",
        },
    },
}
