# In: backend/main.py

from typing import Annotated

import structlog
from fastapi import FastAPI, Depends, HTTPException, Query, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import OAuth2PasswordRequestForm
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

import auth
import config
import crud
import editor
import models
import schemas
import views
from browse import BrowseState, ProfileBrowser
from database import engine, get_db
from logging_config import setup_logging

setup_logging()
log = structlog.get_logger(__name__)

# This line creates the database tables defined in models.py
models.Base.metadata.create_all(bind=engine)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")

app = FastAPI(title="VforVivah")

# --- CORS Middleware ---
# This allows the frontend to communicate with the backend
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(crud.ProfileStoreError)
async def profile_store_error_handler(request: Request, exc: crud.ProfileStoreError):
    log.error("request_failed", path=request.url.path, operation=exc.operation, error=str(exc))
    state = "save_failed" if exc.operation == "put" else BrowseState.LOAD_FAILED.value
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Profile store unavailable", "state": state},
    )


# --- User Registration Endpoint ---
@app.post("/users/", response_model=schemas.User)
def create_new_user(user: schemas.UserCreate, db: Session = Depends(get_db)):
    db_user = crud.get_user_by_email(db, email=user.email)
    if db_user:
        raise HTTPException(status_code=400, detail="Email already registered")
    return crud.create_user(db=db, user=user)

# --- User Login Endpoint ---
@app.post("/token", response_model=schemas.Token)
def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = crud.get_user_by_email(db, email=form_data.username)
    if not user or not auth.verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=401,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token = auth.create_access_token(data={"sub": user.email})
    log.info("user_logged_in", user_id=user.id)
    return {"access_token": access_token, "token_type": "bearer"}


def get_token_claims(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> dict:
    credentials_exception = HTTPException(
        status_code=401,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = auth.decode_access_token(token)
    except JWTError:
        raise credentials_exception
    if crud.is_token_revoked(db, payload["jti"]):
        raise credentials_exception
    return payload


def get_current_user(claims: dict = Depends(get_token_claims), db: Session = Depends(get_db)) -> models.User:
    user = crud.get_user_by_email(db, email=claims["sub"])
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


@app.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    claims: dict = Depends(get_token_claims),
    db: Session = Depends(get_db),
):
    crud.revoke_token(db, claims["jti"])
    log.info("user_logged_out", email=claims["sub"])
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@app.get("/users/me", response_model=schemas.User)
def read_current_user(current_user: models.User = Depends(get_current_user)):
    return current_user


# --- Profile Endpoints ---
@app.get("/profile/", response_model=schemas.Profile)
def read_user_profile(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user)
):
    profile = editor.load_for_edit(db, current_user)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile

@app.put("/profile/", response_model=schemas.Profile)
def update_user_profile(
    submission: schemas.ProfileSubmission,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user)
):
    return editor.save_profile(db, submission, current_user)

@app.get("/profile/view", response_model=schemas.ProfileView)
def view_user_profile(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user)
):
    return views.build_profile_view(editor.load_for_edit(db, current_user))


# --- Browse Endpoint ---
@app.get("/profiles/", response_model=schemas.BrowseResult)
def browse_profiles(
    filters: Annotated[schemas.BrowseFilters, Query()],
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user)
):
    browser = ProfileBrowser(db, current_user)
    browser.load()
    results = browser.set_filters(filters)
    return schemas.BrowseResult(
        state=browser.state.value,
        count=len(results),
        profiles=[views.build_card(profile) for profile in results],
        message=None if results else "No profiles found",
    )


# --- Root Endpoint ---
@app.get("/")
def read_root():
    return {"message": "Hello, VforVivah Backend!"}
