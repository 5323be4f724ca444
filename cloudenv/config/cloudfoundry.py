"""
Cloud Foundry service bindings.

Reads VCAP_SERVICES from a ConfigurationStore (loaded either from the process
environment or from a descriptor file) and looks up bound services.

VCAP_SERVICES layout:
    {
      "<label>": [
        {"name": "...", "label": "...", "tags": [...], "plan": "...", "credentials": {...}}
      ]
    }
"""

import json
import re
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from cloudenv.utils.logging import get_logger

if TYPE_CHECKING:
    from cloudenv.config.store import ConfigurationStore

logger = get_logger(__name__, prefix="CloudFoundry")

VCAP_SERVICES = "VCAP_SERVICES"


class CloudFoundryService(BaseModel):
    """A service instance bound to the application."""
    name: str = Field(..., description="Instance name chosen at bind time")
    label: str = Field("", description="Service offering (e.g., 'cloudantNoSQLDB')")
    plan: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    credentials: Optional[Dict[str, Any]] = None

    model_config = {"extra": "ignore"}


def get_services(store: "ConfigurationStore") -> Dict[str, CloudFoundryService]:
    """
    Get all bound services keyed by instance name.

    Malformed entries are skipped. VCAP_SERVICES may be a mapping or a JSON
    string (descriptor files sometimes embed it as a string).
    """
    vcap = store.get(VCAP_SERVICES)
    if isinstance(vcap, str):
        try:
            vcap = json.loads(vcap)
        except json.JSONDecodeError as e:
            logger.warning(f"{VCAP_SERVICES} is not valid JSON: {e}")
            return {}

    if not isinstance(vcap, dict):
        return {}

    services: Dict[str, CloudFoundryService] = {}
    for label, instances in vcap.items():
        if not isinstance(instances, list):
            continue
        for entry in instances:
            if not isinstance(entry, dict):
                continue
            try:
                service = CloudFoundryService(**{"label": label, **entry})
            except ValidationError as e:
                logger.debug(f"Skipping malformed '{label}' binding: {e.error_count()} errors")
                continue
            services.setdefault(service.name, service)

    return services


def get_service(store: "ConfigurationStore", spec: str) -> Optional[CloudFoundryService]:
    """
    Find a bound service by spec.

    Lookup order:
    1. Exact instance name
    2. Case-insensitive regex search over instance names
    3. Exact label
    4. Exact tag
    """
    services = get_services(store)
    if not services:
        return None

    if spec in services:
        return services[spec]

    try:
        pattern = re.compile(spec, re.IGNORECASE)
    except re.error as e:
        logger.debug(f"'{spec}' is not a usable regex ({e}), skipping name search")
        pattern = None

    if pattern is not None:
        for name, service in services.items():
            if pattern.search(name):
                return service

    for service in services.values():
        if service.label == spec:
            return service

    for service in services.values():
        if spec in service.tags:
            return service

    return None


def get_service_credentials(store: "ConfigurationStore", spec: str) -> Optional[Dict[str, Any]]:
    """Credentials of the service matching spec, or None if unbound."""
    service = get_service(store, spec)
    if service is None:
        return None
    return service.credentials
