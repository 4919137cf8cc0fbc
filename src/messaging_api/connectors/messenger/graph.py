"""Labels, handover, insights, NLP, eventos, ID matching e personas."""

from __future__ import annotations

import json
from typing import Any

from messaging_api.common.models import compact
from messaging_api.connectors.messenger.base import MessengerBaseClient
from messaging_api.infra.crypto.signature import compute_appsecret_proof

PAGE_INBOX_APP_ID = 263902037430900


def _fields(fields: list[str] | None) -> str:
    return ",".join(fields) if fields else "name"


class MessengerGraphApi(MessengerBaseClient):
    """Demais endpoints Graph usados por bots de página."""

    # Labels

    async def create_label(self, name: str) -> dict[str, Any]:
        return await self._call("POST", "me/custom_labels", json={"name": name})

    async def associate_label(self, user_id: str, label_id: int | str) -> dict[str, Any]:
        return await self._call("POST", f"{label_id}/label", json={"user": user_id})

    async def dissociate_label(self, user_id: str, label_id: int | str) -> dict[str, Any]:
        return await self._call("DELETE", f"{label_id}/label", json={"user": user_id})

    async def get_associated_labels(
        self, user_id: str, fields: list[str] | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "GET", f"{user_id}/custom_labels", params={"fields": _fields(fields)}
        )

    async def get_label_details(
        self, label_id: int | str, fields: list[str] | None = None
    ) -> dict[str, Any]:
        return await self._call("GET", str(label_id), params={"fields": _fields(fields)})

    async def get_label_list(self, fields: list[str] | None = None) -> dict[str, Any]:
        return await self._call("GET", "me/custom_labels", params={"fields": _fields(fields)})

    async def delete_label(self, label_id: int | str) -> dict[str, Any]:
        return await self._call("DELETE", str(label_id))

    # Handover protocol

    async def pass_thread_control(
        self,
        recipient_id: str,
        target_app_id: int,
        metadata: str | None = None,
    ) -> dict[str, Any]:
        return await self._call(
            "POST",
            "me/pass_thread_control",
            json=compact(
                {
                    "recipient": {"id": recipient_id},
                    "target_app_id": target_app_id,
                    "metadata": metadata,
                }
            ),
        )

    async def pass_thread_control_to_page_inbox(
        self, recipient_id: str, metadata: str | None = None
    ) -> dict[str, Any]:
        return await self.pass_thread_control(recipient_id, PAGE_INBOX_APP_ID, metadata)

    async def take_thread_control(
        self, recipient_id: str, metadata: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST",
            "me/take_thread_control",
            json=compact({"recipient": {"id": recipient_id}, "metadata": metadata}),
        )

    async def request_thread_control(
        self, recipient_id: str, metadata: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST",
            "me/request_thread_control",
            json=compact({"recipient": {"id": recipient_id}, "metadata": metadata}),
        )

    async def get_secondary_receivers(self) -> list[dict[str, Any]]:
        response = await self._call(
            "GET", "me/secondary_receivers", params={"fields": "id,name"}
        )
        return response["data"]

    async def get_thread_owner(self, recipient_id: str) -> dict[str, Any]:
        """Retorna ``{"app_id": ...}`` do app dono da conversa."""
        response = await self._call(
            "GET", "me/thread_owner", params={"recipient": recipient_id}
        )
        return response["data"][0]["thread_owner"]

    # Insights

    async def get_insights(
        self, metrics: list[str], **options: Any
    ) -> list[dict[str, Any]]:
        """Consulta métricas de mensagens da página.

        Args:
            metrics: Nomes das métricas (``page_messages_*``)
            **options: ``since``, ``until`` (timestamps)
        """
        response = await self._call(
            "GET", "me/insights", params={"metric": ",".join(metrics), **options}
        )
        return response["data"]

    async def _get_single_metric(self, metric: str, options: dict[str, Any]) -> dict[str, Any] | None:
        data = await self.get_insights([metric], **options)
        return data[0] if data else None

    async def get_blocked_conversations(self, **options: Any) -> dict[str, Any] | None:
        return await self._get_single_metric(
            "page_messages_blocked_conversations_unique", options
        )

    async def get_reported_conversations(self, **options: Any) -> dict[str, Any] | None:
        return await self._get_single_metric(
            "page_messages_reported_conversations_unique", options
        )

    async def get_total_messaging_connections(self, **options: Any) -> dict[str, Any] | None:
        return await self._get_single_metric(
            "page_messages_total_messaging_connections", options
        )

    async def get_new_conversations(self, **options: Any) -> dict[str, Any] | None:
        return await self._get_single_metric(
            "page_messages_new_conversations_unique", options
        )

    # Built-in NLP

    async def set_nlp_configs(self, **config: Any) -> dict[str, Any]:
        """Configura NLP nativo (``nlp_enabled``, ``model``, ``custom_token``...)."""
        params = {
            key: str(value).lower() if isinstance(value, bool) else value
            for key, value in config.items()
        }
        return await self._call("POST", "me/nlp_configs", params=params)

    async def enable_nlp(self) -> dict[str, Any]:
        return await self.set_nlp_configs(nlp_enabled=True)

    async def disable_nlp(self) -> dict[str, Any]:
        return await self.set_nlp_configs(nlp_enabled=False)

    # App events

    async def log_custom_events(
        self,
        *,
        app_id: int | str,
        page_id: int | str,
        page_scoped_user_id: str,
        events: list[dict[str, Any]],
    ) -> dict[str, Any]:
        return await self._call(
            "POST",
            f"{app_id}/activities",
            json={
                "event": "CUSTOM_APP_EVENTS",
                "custom_events": json.dumps(events),
                "advertiser_tracking_enabled": 0,
                "application_tracking_enabled": 0,
                "extinfo": json.dumps(["mb1"]),
                "page_id": page_id,
                "page_scoped_user_id": page_scoped_user_id,
            },
        )

    # ID matching

    async def get_user_field(
        self,
        user_id: str,
        field: str,
        *,
        app: str | None = None,
        page: str | None = None,
    ) -> dict[str, Any]:
        """Lê campo de ID matching, sempre com appsecret_proof.

        Raises:
            ValueError: Cliente sem app_secret.
        """
        if not self._app_secret:
            raise ValueError("app_secret é obrigatório para esta operação")
        proof = compute_appsecret_proof(self._access_token, self._app_secret)
        return await self._call(
            "GET",
            f"{user_id}/{field}",
            params={"appsecret_proof": proof, "app": app, "page": page},
        )

    async def get_ids_for_apps(
        self, user_id: str, *, app: str | None = None, page: str | None = None
    ) -> dict[str, Any]:
        return await self.get_user_field(user_id, "ids_for_apps", app=app, page=page)

    async def get_ids_for_pages(
        self, user_id: str, *, app: str | None = None, page: str | None = None
    ) -> dict[str, Any]:
        return await self.get_user_field(user_id, "ids_for_pages", app=app, page=page)

    # Personas

    async def create_persona(self, persona: dict[str, Any]) -> dict[str, Any]:
        """Cria persona (``name``, ``profile_picture_url``). Retorna ``{"id": ...}``."""
        return await self._call("POST", "me/personas", json=persona)

    async def get_persona(self, persona_id: str) -> dict[str, Any]:
        return await self._call("GET", persona_id)

    async def get_personas(self, cursor: str | None = None) -> dict[str, Any]:
        return await self._call("GET", "me/personas", params={"after": cursor})

    async def get_all_personas(self) -> list[dict[str, Any]]:
        personas: list[dict[str, Any]] = []
        cursor: str | None = None
        while True:
            response = await self.get_personas(cursor)
            personas.extend(response.get("data", []))
            paging = response.get("paging") or {}
            cursor = (paging.get("cursors") or {}).get("after")
            if not cursor:
                return personas

    async def delete_persona(self, persona_id: str) -> dict[str, Any]:
        return await self._call("DELETE", persona_id)
