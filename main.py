import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from settings import settings
from db.init import init_store
from routers import customer
from utils.errors import LoyaltyError

logging.basicConfig(
    level=settings.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


app = FastAPI(title=settings.APP_TITLE)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
def startup():
    store = init_store(seed=settings.SEED_CUSTOMERS)
    logger.info(f"{settings.APP_TITLE} started with {len(store.all())} customers")


@app.exception_handler(LoyaltyError)
async def loyalty_error_handler(request: Request, exc: LoyaltyError):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.get("/health")
def health_check():
    return {"status": "ok"}

# Routers
app.include_router(customer.router, prefix="/api/customers", tags=["Customers"])


@app.get("/")
def root():
    return {"message": "Loyalty service running successfully"}
