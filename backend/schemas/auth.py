from pydantic import BaseModel


class EmailSubmission(BaseModel):
    # Format is checked by the auth flow so a bad address never reaches the mailer
    email: str = ""
