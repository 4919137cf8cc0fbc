"""Página, app, assinaturas e Messenger Profile API."""

from __future__ import annotations

from typing import Any

from messaging_api.connectors.messenger.base import MessengerBaseClient

DEFAULT_USER_FIELDS = ("id", "name", "first_name", "last_name", "profile_pic")

DEFAULT_SUBSCRIPTION_FIELDS = (
    "messages",
    "messaging_postbacks",
    "messaging_optins",
    "messaging_referrals",
    "messaging_handovers",
    "messaging_policy_enforcement",
)

MESSENGER_PROFILE_FIELDS = (
    "account_linking_url",
    "persistent_menu",
    "get_started",
    "greeting",
    "ice_breakers",
    "whitelisted_domains",
)


def _wrap_persistent_menu(
    menu_items: list[dict[str, Any]],
    composer_input_disabled: bool,
) -> list[dict[str, Any]]:
    """Envolve itens soltos em uma entrada de locale ``default``."""
    if any(item.get("locale") == "default" for item in menu_items):
        return menu_items
    return [
        {
            "locale": "default",
            "composer_input_disabled": composer_input_disabled,
            "call_to_actions": menu_items,
        }
    ]


def _join_fields(fields: list[str] | tuple[str, ...] | str) -> str:
    return fields if isinstance(fields, str) else ",".join(fields)


class MessengerProfileApi(MessengerBaseClient):
    """Informações de página/app e configuração do perfil Messenger."""

    # Página e app

    async def get_page_info(
        self, fields: list[str] | tuple[str, ...] = ("id", "name")
    ) -> dict[str, Any]:
        return await self._call("GET", "me", params={"fields": _join_fields(fields)})

    async def debug_token(self) -> dict[str, Any]:
        """Inspeciona o page token atual com o token de app.

        Raises:
            ValueError: Sem app_id ou app_secret.
        """
        app_token = self._app_access_token()
        response = await self._call(
            "GET",
            "debug_token",
            params={"input_token": self._access_token},
            access_token=app_token,
        )
        return response["data"]

    async def create_subscription(
        self,
        callback_url: str,
        verify_token: str,
        *,
        object_type: str = "page",
        fields: list[str] | tuple[str, ...] = DEFAULT_SUBSCRIPTION_FIELDS,
        include_values: bool | None = None,
        app_access_token: str | None = None,
    ) -> dict[str, Any]:
        """Cria assinatura de webhook do app.

        Args:
            callback_url: URL pública do webhook
            verify_token: Token validado no desafio ``hub.verify_token``
            object_type: Objeto assinado (padrão ``page``)
            fields: Campos de webhook
            include_values: Inclui valores alterados nas notificações
            app_access_token: Token de app; padrão ``app_id|app_secret``

        Returns:
            ``{"success": true}``
        """
        app_token = self._app_access_token(app_access_token)
        return await self._call(
            "POST",
            f"{self._app_id}/subscriptions",
            json={
                "object": object_type,
                "callback_url": callback_url,
                "fields": _join_fields(fields),
                "include_values": include_values,
                "verify_token": verify_token,
            },
            access_token=app_token,
        )

    async def get_subscriptions(
        self, app_access_token: str | None = None
    ) -> list[dict[str, Any]]:
        app_token = self._app_access_token(app_access_token)
        response = await self._call(
            "GET", f"{self._app_id}/subscriptions", access_token=app_token
        )
        return response["data"]

    async def get_page_subscription(
        self, app_access_token: str | None = None
    ) -> dict[str, Any] | None:
        subscriptions = await self.get_subscriptions(app_access_token)
        return next((sub for sub in subscriptions if sub.get("object") == "page"), None)

    async def get_messaging_feature_review(self) -> list[dict[str, Any]]:
        response = await self._call("GET", "me/messaging_feature_review")
        return response["data"]

    # Usuário

    async def get_user_profile(
        self,
        user_id: str,
        fields: list[str] | tuple[str, ...] = DEFAULT_USER_FIELDS,
    ) -> dict[str, Any]:
        return await self._call("GET", user_id, params={"fields": _join_fields(fields)})

    # Messenger Profile

    async def get_messenger_profile(self, fields: list[str] | tuple[str, ...]) -> list[Any]:
        response = await self._call(
            "GET", "me/messenger_profile", params={"fields": _join_fields(fields)}
        )
        return response["data"]

    async def set_messenger_profile(self, profile: dict[str, Any]) -> dict[str, Any]:
        return await self._call("POST", "me/messenger_profile", json=profile)

    async def delete_messenger_profile(
        self, fields: list[str] | tuple[str, ...]
    ) -> dict[str, Any]:
        return await self._call(
            "DELETE", "me/messenger_profile", json={"fields": list(fields)}
        )

    async def _get_profile_field(self, field: str) -> Any:
        data = await self.get_messenger_profile([field])
        if not data:
            return None
        return data[0].get(field)

    async def get_get_started(self) -> dict[str, Any] | None:
        return await self._get_profile_field("get_started")

    async def set_get_started(self, payload: str) -> dict[str, Any]:
        return await self.set_messenger_profile({"get_started": {"payload": payload}})

    async def delete_get_started(self) -> dict[str, Any]:
        return await self.delete_messenger_profile(["get_started"])

    async def get_persistent_menu(self) -> list[dict[str, Any]] | None:
        return await self._get_profile_field("persistent_menu")

    async def set_persistent_menu(
        self,
        menu_items: list[dict[str, Any]],
        composer_input_disabled: bool = False,
    ) -> dict[str, Any]:
        """Define o menu persistente.

        Itens sem entrada ``locale: default`` são envolvidos automaticamente.
        """
        menu = _wrap_persistent_menu(menu_items, composer_input_disabled)
        return await self.set_messenger_profile({"persistent_menu": menu})

    async def delete_persistent_menu(self) -> dict[str, Any]:
        return await self.delete_messenger_profile(["persistent_menu"])

    async def get_user_persistent_menu(self, user_id: str) -> list[dict[str, Any]] | None:
        response = await self._call(
            "GET", "me/custom_user_settings", params={"psid": user_id}
        )
        data = response.get("data") or []
        if not data:
            return None
        return data[0].get("user_level_persistent_menu")

    async def set_user_persistent_menu(
        self,
        user_id: str,
        menu_items: list[dict[str, Any]],
        composer_input_disabled: bool = False,
    ) -> dict[str, Any]:
        menu = _wrap_persistent_menu(menu_items, composer_input_disabled)
        return await self._call(
            "POST",
            "me/custom_user_settings",
            json={"psid": user_id, "persistent_menu": menu},
        )

    async def delete_user_persistent_menu(self, user_id: str) -> dict[str, Any]:
        return await self._call(
            "DELETE",
            "me/custom_user_settings",
            params={"psid": user_id, "params": '["persistent_menu"]'},
        )

    async def get_greeting(self) -> list[dict[str, Any]] | None:
        return await self._get_profile_field("greeting")

    async def set_greeting(self, greeting: str | list[dict[str, Any]]) -> dict[str, Any]:
        """Define saudação; string vira entrada de locale ``default``."""
        if isinstance(greeting, str):
            greeting = [{"locale": "default", "text": greeting}]
        return await self.set_messenger_profile({"greeting": greeting})

    async def delete_greeting(self) -> dict[str, Any]:
        return await self.delete_messenger_profile(["greeting"])

    async def get_ice_breakers(self) -> list[dict[str, Any]] | None:
        return await self._get_profile_field("ice_breakers")

    async def set_ice_breakers(self, ice_breakers: list[dict[str, Any]]) -> dict[str, Any]:
        return await self.set_messenger_profile({"ice_breakers": ice_breakers})

    async def delete_ice_breakers(self) -> dict[str, Any]:
        return await self.delete_messenger_profile(["ice_breakers"])

    async def get_whitelisted_domains(self) -> list[str] | None:
        return await self._get_profile_field("whitelisted_domains")

    async def set_whitelisted_domains(self, domains: list[str]) -> dict[str, Any]:
        return await self.set_messenger_profile({"whitelisted_domains": domains})

    async def delete_whitelisted_domains(self) -> dict[str, Any]:
        return await self.delete_messenger_profile(["whitelisted_domains"])

    async def get_account_linking_url(self) -> str | None:
        return await self._get_profile_field("account_linking_url")

    async def set_account_linking_url(self, url: str) -> dict[str, Any]:
        return await self.set_messenger_profile({"account_linking_url": url})

    async def delete_account_linking_url(self) -> dict[str, Any]:
        return await self.delete_messenger_profile(["account_linking_url"])
