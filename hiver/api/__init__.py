from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.sessions import SessionMiddleware

from hiver.api.endpoints import get_endpoints_router
from hiver.api.hives import get_hives_router
from hiver.api.posts import get_posts_router
from hiver.config import settings
from hiver.engine import RelationshipEngine
from hiver.errors import HiverError
from hiver.hive_store.base import HiveStore
from hiver.hives import HiveService
from hiver.llms.base import LLMChat
from hiver.post_store.base import PostStore
from hiver.posts import PostService
from hiver.profile_store.base import ProfileStore
from hiver.ranking.suggestions import SuggestionRanker
from hiver.ranking.trending import TrendingRanker
from hiver.recommendations import HiveRecommender
from hiver.relationship_store.base import RelationshipStore


async def handle_hiver_error(request: Request, exc: HiverError) -> JSONResponse:
    """Report core errors to the client as {"detail": message}."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app(
    *,
    relationship_store: RelationshipStore,
    hive_store: HiveStore,
    profile_store: ProfileStore,
    post_store: PostStore,
    chatbot: LLMChat,
) -> FastAPI:
    """Create FastAPI app."""
    app = FastAPI()

    # Add session middleware first
    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(HiverError, handle_hiver_error)

    engine = RelationshipEngine(relationship_store)
    trending_ranker = TrendingRanker(hive_store, gravity=settings.trending_gravity)
    recommender = HiveRecommender(
        profile_store=profile_store,
        hive_store=hive_store,
        chatbot=chatbot,
        trending_ranker=trending_ranker,
        system_message=settings.recommendation_system_message,
        candidate_hives=settings.recommendation_candidate_hives,
        history=settings.recommendation_history,
    )

    app.include_router(
        router=get_endpoints_router(
            engine=engine,
            suggestion_ranker=SuggestionRanker(relationship_store, profile_store),
            profile_store=profile_store,
        )
    )
    app.include_router(
        router=get_hives_router(
            hive_service=HiveService(hive_store),
            trending_ranker=trending_ranker,
            recommender=recommender,
        )
    )
    app.include_router(
        router=get_posts_router(
            post_service=PostService(post_store, relationship_store, profile_store),
        )
    )

    return app
