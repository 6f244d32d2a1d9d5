"""Retool configuration variable operations.

Available for organizations with configuration variables enabled
(Retool 3.42+).
"""
from __future__ import annotations
from typing import List, Optional

from .client import RetoolClient
from .envelope import do_paginated_request, do_single_request
from .models import ConfigurationValue, ConfigurationVariable


class ConfigurationVariableService:
    """Service for managing configuration variables and their values.

    Read operations need the "Configuration Variables > Read" scope, write
    operations "Configuration Variables > Write".
    """

    def __init__(self, client: RetoolClient):
        self.client = client

    @property
    def _collection_url(self) -> str:
        return f"{self.client.base_url}/configuration_variables"

    def get_configuration_variable(self, variable_id: str) -> Optional[ConfigurationVariable]:
        return do_single_request(
            self.client, "GET", f"{self._collection_url}/{variable_id}", parser=ConfigurationVariable.from_dict
        )

    def list_configuration_variables(self) -> List[ConfigurationVariable]:
        return do_paginated_request(self.client, self._collection_url, parser=ConfigurationVariable.from_dict)

    def create_configuration_variable(
        self,
        name: str,
        description: str,
        secret: bool,
        values: List[ConfigurationValue],
    ) -> Optional[ConfigurationVariable]:
        """Create a configuration variable with one value per environment."""
        payload = {"name": name, "description": description, "secret": secret, "values": values}
        return do_single_request(
            self.client, "POST", self._collection_url, payload, ConfigurationVariable.from_dict
        )

    def update_configuration_variable(
        self,
        variable_id: str,
        name: str,
        description: str,
        secret: bool,
        values: List[ConfigurationValue],
    ) -> Optional[ConfigurationVariable]:
        """Replace a configuration variable and all of its values."""
        payload = {"name": name, "description": description, "secret": secret, "values": values}
        return do_single_request(
            self.client, "PUT", f"{self._collection_url}/{variable_id}", payload, ConfigurationVariable.from_dict
        )

    def delete_configuration_variable(self, variable_id: str) -> None:
        """Delete a configuration variable and its values."""
        do_single_request(self.client, "DELETE", f"{self._collection_url}/{variable_id}")
