from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from ..core.security import decode_token, subject_of

bearer = HTTPBearer(auto_error=False)

def get_current_user_id(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> str:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=401, detail="Missing Authorization Bearer token")
    try:
        payload = decode_token(creds.credentials)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")
    user_id = subject_of(payload)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid token type")
    return user_id
