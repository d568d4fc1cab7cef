# backend/routes/auth.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas import user as schemas
from services.errors import ValidationError
from utils.audit import write_log
from utils.hashing import get_password_hash, verify_password
from utils.tokenJWT import token_for_user

router = APIRouter(tags=["Auth"])


def _auth_response(message: str, user: User) -> schemas.AuthResponse:
    return schemas.AuthResponse(
        message=message,
        token=token_for_user(user),
        user=schemas.UserOut.model_validate(user),
    )


# Register a new user
@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    normalized_email = user.email.strip().lower()

    reason = None
    if db.query(User).filter(func.lower(User.email) == normalized_email).first():
        reason = "User already exists with this email"
    elif db.query(User).filter(User.username == user.username).first():
        reason = "Username is already taken"
    if reason:
        write_log(db, user_id=None, action="REGISTER", resource="auth", status="FAIL",
                  request=request, meta={"email": normalized_email, "reason": reason})
        raise ValidationError(reason)

    new_user = User(
        username=user.username,
        email=normalized_email,
        password_hash=get_password_hash(user.password),
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration with the same identity
        db.rollback()
        raise ValidationError("User already exists")
    db.refresh(new_user)

    write_log(db, user_id=new_user.id, action="REGISTER", resource="auth",
              request=request, meta={"email": new_user.email})
    return _auth_response("User registered successfully", new_user)


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.AuthResponse)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    if not payload.email or not payload.password:
        raise ValidationError("Please provide email and password")

    db_user = db.query(User).filter(User.email == payload.email.strip().lower()).first()

    if not db_user or not verify_password(payload.password, db_user.password_hash):
        write_log(db, user_id=(db_user.id if db_user else None), action="LOGIN", resource="auth",
                  status="FAIL", request=request, meta={"email": payload.email})
        raise ValidationError("Invalid credentials")

    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              request=request, meta={"email": db_user.email})
    return _auth_response("Login successful", db_user)
