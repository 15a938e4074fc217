from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request, status

from hiver.api.auth import get_viewer, verify_password, verify_session
from hiver.config import settings
from hiver.domain.profile import NotificationPreferencesUpdate
from hiver.domain.relationships import ConnectionAction, next_action
from hiver.engine import RelationshipEngine
from hiver.preferences import get_notification_preferences, update_notification_preferences
from hiver.profile_store.base import ProfileStore
from hiver.ranking.suggestions import SuggestionRanker


def _create_login_endpoint(profile_store: ProfileStore):
    """Create the login endpoint handler."""

    async def login(
        request: Request,
        user_id: str = Form(...),
        password: str = Form(...),
    ):
        profile = await profile_store.get_profile(user_id)
        if profile is None or not verify_password(password):
            raise HTTPException(status_code=400, detail="Invalid user or password")

        request.session["viewer_id"] = profile.id
        return {"viewer_id": profile.id, "name": profile.name}

    return login


def _create_follow_endpoints(engine: RelationshipEngine):
    """Create the follow status, follow and unfollow handlers."""

    async def follow_status(subject_id: str, viewer: str | None = Depends(get_viewer)):
        return {
            "subject_id": subject_id,
            "following": await engine.get_follow_status(viewer, subject_id),
            "follower_count": await engine.count_followers(subject_id),
        }

    async def follow(subject_id: str, viewer: str = Depends(verify_session)):
        edge = await engine.follow(viewer, subject_id)
        return {
            "subject_id": subject_id,
            "following": True,
            "follower_count": await engine.count_followers(subject_id),
            "created_at": edge.created_at,
        }

    async def unfollow(subject_id: str, viewer: str = Depends(verify_session)):
        await engine.unfollow(viewer, subject_id)
        return {
            "subject_id": subject_id,
            "following": False,
            "follower_count": await engine.count_followers(subject_id),
        }

    async def list_following(viewer: str = Depends(verify_session)):
        follows = await engine.list_following(viewer)
        return {"count": len(follows), "items": follows}

    return follow_status, follow, unfollow, list_following


def _create_connection_endpoints(engine: RelationshipEngine):
    """Create the connection handlers."""

    async def list_connections(viewer: str = Depends(verify_session)):
        return await engine.list_connections(viewer)

    async def connection_status(subject_id: str, viewer: str | None = Depends(get_viewer)):
        relationship = await engine.get_connection_status(viewer, subject_id)
        return {
            "subject_id": subject_id,
            "status": relationship,
            "action": next_action(relationship),
        }

    async def request_connection(subject_id: str, viewer: str = Depends(verify_session)):
        return await engine.request_connection(viewer, subject_id)

    async def accept_connection(edge_id: str, viewer: str = Depends(verify_session)):
        return await engine.accept_connection(edge_id, viewer)

    async def terminate_connection(
        edge_id: str,
        action: ConnectionAction | None = Query(None, description="reject, cancel or remove"),
        viewer: str = Depends(verify_session),
    ):
        if action in (ConnectionAction.REQUEST, ConnectionAction.ACCEPT):
            raise HTTPException(
                status_code=422, detail=f"{action.value} does not delete a connection"
            )
        await engine.terminate_connection(edge_id, viewer, action)
        return {"edge_id": edge_id, "deleted": True}

    return (
        list_connections,
        connection_status,
        request_connection,
        accept_connection,
        terminate_connection,
    )


def _create_suggestions_endpoint(ranker: SuggestionRanker):
    async def suggestions(
        limit: int = Query(settings.suggestion_limit, ge=1, le=50),
        viewer: str = Depends(verify_session),
    ):
        return await ranker.suggest(viewer, limit=limit)

    return suggestions


def _create_preferences_endpoints(profile_store: ProfileStore):
    async def get_preferences(viewer: str = Depends(verify_session)):
        return await get_notification_preferences(profile_store, viewer)

    async def update_preferences(
        changes: NotificationPreferencesUpdate,
        viewer: str = Depends(verify_session),
    ):
        return await update_notification_preferences(profile_store, viewer, changes)

    return get_preferences, update_preferences


def get_endpoints_router(
    *,
    engine: RelationshipEngine,
    suggestion_ranker: SuggestionRanker,
    profile_store: ProfileStore,
) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    async def health_check():
        return {"status": "healthy"}

    @router.post("/logout")
    async def logout(request: Request):
        request.session.clear()
        return {"status": "signed out"}

    router.post("/login")(_create_login_endpoint(profile_store))

    follow_status, follow, unfollow, list_following = _create_follow_endpoints(engine)
    router.get("/api/follows")(list_following)
    router.get("/api/follows/{subject_id}")(follow_status)
    router.post("/api/follows/{subject_id}")(follow)
    router.delete("/api/follows/{subject_id}")(unfollow)

    (
        list_connections,
        connection_status,
        request_connection,
        accept_connection,
        terminate_connection,
    ) = _create_connection_endpoints(engine)
    router.get("/api/connections")(list_connections)
    router.get("/api/connections/status/{subject_id}")(connection_status)
    router.post("/api/connections/{subject_id}", status_code=status.HTTP_201_CREATED)(
        request_connection
    )
    router.post("/api/connections/{edge_id}/accept")(accept_connection)
    router.delete("/api/connections/{edge_id}")(terminate_connection)

    router.get("/api/suggestions")(_create_suggestions_endpoint(suggestion_ranker))

    get_preferences, update_preferences = _create_preferences_endpoints(profile_store)
    router.get("/api/notification-preferences")(get_preferences)
    router.put("/api/notification-preferences")(update_preferences)

    return router
