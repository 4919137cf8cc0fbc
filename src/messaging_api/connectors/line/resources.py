"""Recursos LINE além do envio: perfis, grupos, rich menu, LIFF e insights."""

from __future__ import annotations

from typing import Any

from messaging_api.connectors.line.base import LineBaseClient

JPEG_MAGIC = b"\xff\xd8\xff"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def detect_image_mime(image: bytes) -> str | None:
    """Detecta image/jpeg ou image/png pelos magic bytes."""
    if image.startswith(JPEG_MAGIC):
        return "image/jpeg"
    if image.startswith(PNG_MAGIC):
        return "image/png"
    return None


class LineResourcesApi(LineBaseClient):
    """Endpoints de consulta e gestão de recursos do canal."""

    # Conteúdo e perfil

    async def retrieve_message_content(
        self, message_id: str, *, access_token: str | None = None
    ) -> bytes:
        """Baixa o binário (imagem, vídeo, áudio, arquivo) de uma mensagem recebida."""
        return await self._download(
            self.data_url(f"v2/bot/message/{message_id}/content"),
            access_token=access_token,
        )

    async def get_user_profile(
        self, user_id: str, *, access_token: str | None = None
    ) -> dict[str, Any] | None:
        """Retorna perfil (display_name, user_id, picture_url, status_message).

        Returns:
            Perfil, ou None se o usuário não existe ou bloqueou o bot (404).
        """
        return await self._call(
            "GET",
            f"v2/bot/profile/{user_id}",
            access_token=access_token,
            allow_not_found=True,
        )

    # Grupos

    async def get_group_summary(
        self, group_id: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "GET", f"v2/bot/group/{group_id}/summary", access_token=access_token
        )

    async def get_group_members_count(
        self, group_id: str, *, access_token: str | None = None
    ) -> int:
        data = await self._call(
            "GET", f"v2/bot/group/{group_id}/members/count", access_token=access_token
        )
        return data["count"]

    async def get_group_member_profile(
        self, group_id: str, user_id: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "GET",
            f"v2/bot/group/{group_id}/member/{user_id}",
            access_token=access_token,
        )

    async def get_group_member_ids(
        self,
        group_id: str,
        start: str | None = None,
        *,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """Retorna uma página de ids: ``{"member_ids": [...], "next": token}``."""
        return await self._call(
            "GET",
            f"v2/bot/group/{group_id}/members/ids",
            params={"start": start} if start else None,
            access_token=access_token,
        )

    async def get_all_group_member_ids(
        self, group_id: str, *, access_token: str | None = None
    ) -> list[str]:
        """Percorre todas as páginas seguindo o token ``next``."""
        member_ids: list[str] = []
        start: str | None = None
        while True:
            page = await self.get_group_member_ids(group_id, start, access_token=access_token)
            member_ids.extend(page.get("member_ids", []))
            start = page.get("next")
            if not start:
                return member_ids

    async def leave_group(
        self, group_id: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST", f"v2/bot/group/{group_id}/leave", access_token=access_token
        )

    # Salas

    async def get_room_members_count(
        self, room_id: str, *, access_token: str | None = None
    ) -> int:
        data = await self._call(
            "GET", f"v2/bot/room/{room_id}/members/count", access_token=access_token
        )
        return data["count"]

    async def get_room_member_profile(
        self, room_id: str, user_id: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "GET",
            f"v2/bot/room/{room_id}/member/{user_id}",
            access_token=access_token,
        )

    async def get_room_member_ids(
        self,
        room_id: str,
        start: str | None = None,
        *,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        return await self._call(
            "GET",
            f"v2/bot/room/{room_id}/members/ids",
            params={"start": start} if start else None,
            access_token=access_token,
        )

    async def get_all_room_member_ids(
        self, room_id: str, *, access_token: str | None = None
    ) -> list[str]:
        member_ids: list[str] = []
        start: str | None = None
        while True:
            page = await self.get_room_member_ids(room_id, start, access_token=access_token)
            member_ids.extend(page.get("member_ids", []))
            start = page.get("next")
            if not start:
                return member_ids

    async def leave_room(
        self, room_id: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST", f"v2/bot/room/{room_id}/leave", access_token=access_token
        )

    # Seguidores

    async def get_follower_ids(
        self, start: str | None = None, *, access_token: str | None = None
    ) -> dict[str, Any]:
        """Retorna uma página de ids: ``{"user_ids": [...], "next": token}``."""
        return await self._call(
            "GET",
            "v2/bot/followers/ids",
            params={"start": start} if start else None,
            access_token=access_token,
        )

    async def get_all_follower_ids(self, *, access_token: str | None = None) -> list[str]:
        user_ids: list[str] = []
        start: str | None = None
        while True:
            page = await self.get_follower_ids(start, access_token=access_token)
            user_ids.extend(page.get("user_ids", []))
            start = page.get("next")
            if not start:
                return user_ids

    # Rich menu

    async def get_rich_menu_list(
        self, *, access_token: str | None = None
    ) -> list[dict[str, Any]]:
        data = await self._call("GET", "v2/bot/richmenu/list", access_token=access_token)
        return data["richmenus"]

    async def get_rich_menu(
        self, rich_menu_id: str, *, access_token: str | None = None
    ) -> dict[str, Any] | None:
        return await self._call(
            "GET",
            f"v2/bot/richmenu/{rich_menu_id}",
            access_token=access_token,
            allow_not_found=True,
        )

    async def create_rich_menu(
        self, rich_menu: dict[str, Any], *, access_token: str | None = None
    ) -> dict[str, Any]:
        """Cria rich menu. Retorna ``{"rich_menu_id": ...}``."""
        return await self._call(
            "POST", "v2/bot/richmenu", json=rich_menu, access_token=access_token
        )

    async def delete_rich_menu(
        self, rich_menu_id: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "DELETE", f"v2/bot/richmenu/{rich_menu_id}", access_token=access_token
        )

    async def get_linked_rich_menu(
        self, user_id: str, *, access_token: str | None = None
    ) -> dict[str, Any] | None:
        return await self._call(
            "GET",
            f"v2/bot/user/{user_id}/richmenu",
            access_token=access_token,
            allow_not_found=True,
        )

    async def link_rich_menu(
        self, user_id: str, rich_menu_id: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST",
            f"v2/bot/user/{user_id}/richmenu/{rich_menu_id}",
            access_token=access_token,
        )

    async def unlink_rich_menu(
        self, user_id: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "DELETE", f"v2/bot/user/{user_id}/richmenu", access_token=access_token
        )

    async def link_rich_menu_to_multiple_users(
        self,
        rich_menu_id: str,
        user_ids: list[str],
        *,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        return await self._call(
            "POST",
            "v2/bot/richmenu/bulk/link",
            json={"rich_menu_id": rich_menu_id, "user_ids": user_ids},
            access_token=access_token,
        )

    async def unlink_rich_menus_from_multiple_users(
        self, user_ids: list[str], *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST",
            "v2/bot/richmenu/bulk/unlink",
            json={"user_ids": user_ids},
            access_token=access_token,
        )

    async def get_default_rich_menu(
        self, *, access_token: str | None = None
    ) -> dict[str, Any] | None:
        return await self._call(
            "GET",
            "v2/bot/user/all/richmenu",
            access_token=access_token,
            allow_not_found=True,
        )

    async def set_default_rich_menu(
        self, rich_menu_id: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST", f"v2/bot/user/all/richmenu/{rich_menu_id}", access_token=access_token
        )

    async def delete_default_rich_menu(
        self, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "DELETE", "v2/bot/user/all/richmenu", access_token=access_token
        )

    async def upload_rich_menu_image(
        self,
        rich_menu_id: str,
        image: bytes,
        *,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """Envia imagem do rich menu (JPEG ou PNG).

        Raises:
            ValueError: Se a imagem não for JPEG nem PNG.
        """
        mime = detect_image_mime(image)
        if mime is None:
            raise ValueError("Imagem deve ser `image/jpeg` ou `image/png`")

        return await self._call(
            "POST",
            self.data_url(f"v2/bot/richmenu/{rich_menu_id}/content"),
            content=image,
            headers={"Content-Type": mime},
            access_token=access_token,
        )

    async def download_rich_menu_image(
        self, rich_menu_id: str, *, access_token: str | None = None
    ) -> bytes | None:
        return await self._download(
            self.data_url(f"v2/bot/richmenu/{rich_menu_id}/content"),
            access_token=access_token,
            allow_not_found=True,
        )

    # Account link

    async def issue_link_token(
        self, user_id: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        """Emite link token. Retorna ``{"link_token": ...}``."""
        return await self._call(
            "POST", f"v2/bot/user/{user_id}/linkToken", access_token=access_token
        )

    # LIFF

    async def get_liff_app_list(
        self, *, access_token: str | None = None
    ) -> list[dict[str, Any]]:
        data = await self._call("GET", "liff/v1/apps", access_token=access_token)
        return data.get("apps", [])

    async def create_liff_app(
        self, view: dict[str, Any], *, access_token: str | None = None
    ) -> dict[str, Any]:
        """Cria app LIFF. ``view`` contém ``type`` e ``url``; retorna ``{"liff_id": ...}``."""
        return await self._call(
            "POST", "liff/v1/apps", json={"view": view}, access_token=access_token
        )

    async def update_liff_app(
        self, liff_id: str, view: dict[str, Any], *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "PUT", f"liff/v1/apps/{liff_id}/view", json=view, access_token=access_token
        )

    async def delete_liff_app(
        self, liff_id: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "DELETE", f"liff/v1/apps/{liff_id}", access_token=access_token
        )

    # Bot e webhook

    async def get_bot_info(self, *, access_token: str | None = None) -> dict[str, Any]:
        return await self._call("GET", "v2/bot/info", access_token=access_token)

    async def get_webhook_endpoint_info(
        self, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "GET", "v2/bot/channel/webhook/endpoint", access_token=access_token
        )

    async def set_webhook_endpoint(
        self, endpoint: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "PUT",
            "v2/bot/channel/webhook/endpoint",
            json={"endpoint": endpoint},
            access_token=access_token,
        )

    async def test_webhook_endpoint(
        self, endpoint: str | None = None, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST",
            "v2/bot/channel/webhook/test",
            json={"endpoint": endpoint} if endpoint else {},
            access_token=access_token,
        )

    # Quota e estatísticas

    async def get_target_limit_for_additional_messages(
        self, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call("GET", "v2/bot/message/quota", access_token=access_token)

    async def get_number_of_messages_sent_this_month(
        self, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "GET", "v2/bot/message/quota/consumption", access_token=access_token
        )

    async def _get_delivery_count(
        self, kind: str, date: str, access_token: str | None
    ) -> dict[str, Any]:
        return await self._call(
            "GET",
            f"v2/bot/message/delivery/{kind}",
            params={"date": date},
            access_token=access_token,
        )

    async def get_number_of_sent_reply_messages(
        self, date: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        """Mensagens de reply enviadas no dia (``date`` no formato yyyyMMdd)."""
        return await self._get_delivery_count("reply", date, access_token)

    async def get_number_of_sent_push_messages(
        self, date: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._get_delivery_count("push", date, access_token)

    async def get_number_of_sent_multicast_messages(
        self, date: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._get_delivery_count("multicast", date, access_token)

    async def get_number_of_sent_broadcast_messages(
        self, date: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._get_delivery_count("broadcast", date, access_token)

    async def get_number_of_message_deliveries(
        self, date: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "GET",
            "v2/bot/insight/message/delivery",
            params={"date": date},
            access_token=access_token,
        )

    async def get_number_of_followers(
        self, date: str, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "GET",
            "v2/bot/insight/followers",
            params={"date": date},
            access_token=access_token,
        )

    async def get_friend_demographics(
        self, *, access_token: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "GET", "v2/bot/insight/demographic", access_token=access_token
        )
