import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from stampit.db import engine, Base
from stampit.settings import CORS_ORIGINS, LOG_LEVEL

from stampit.models.account import Account
from stampit.models.auth_session import AuthSession
from stampit.models.business import Business
from stampit.models.customer import Customer
from stampit.models.review import Review
from stampit.models.reward import Reward
from stampit.models.visit import Visit

from stampit.routes.auth import router as auth_router
from stampit.routes.businesses import router as businesses_router
from stampit.routes.customers import router as customers_router

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Stamp It")

# ─── CORS ─────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup():
    Base.metadata.create_all(bind=engine)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("database error", extra={"path": str(request.url.path)})
    return JSONResponse(
        status_code=400,
        content={"detail": str(getattr(exc, "orig", None) or exc)},
    )


app.include_router(auth_router)
app.include_router(businesses_router)
app.include_router(customers_router)


@app.get("/")
def read_root():
    return {"message": "Stamp It is running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8001)
