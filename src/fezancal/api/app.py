from fastapi import FastAPI
from fezancal.api.public import router as public_router

app = FastAPI(title="fezancal public api")
app.include_router(public_router)
