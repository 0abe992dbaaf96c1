from dataclasses import dataclass
from http import HTTPStatus

from application.ports import RepositoryApi, UpstreamHTTPError, UpstreamTransportError


CREDENTIAL_VALID = "valid"
CREDENTIAL_REJECTED = "rejected"
CREDENTIAL_UNVERIFIED = "unverified"


@dataclass(frozen=True)
class CredentialCheckResult:
    status: str
    login: str | None = None
    status_code: int | None = None
    error: str | None = None

    @property
    def is_fatal(self) -> bool:
        return self.status == CREDENTIAL_REJECTED


def verify_credentials(api: RepositoryApi) -> CredentialCheckResult:
    """Confirm the configured token with one call to the upstream "who am I" endpoint.

    Only a credential the upstream explicitly rejects (401) is fatal. Transport
    failures, other statuses and any other error leave the credential
    unverified; the caller decides whether to keep starting.
    """
    try:
        user = api.get_authenticated_user()
    except UpstreamHTTPError as error:
        status = CREDENTIAL_REJECTED if error.status_code == HTTPStatus.UNAUTHORIZED else CREDENTIAL_UNVERIFIED
        return CredentialCheckResult(status=status, status_code=error.status_code, error=str(error))
    except UpstreamTransportError as error:
        return CredentialCheckResult(status=CREDENTIAL_UNVERIFIED, error=str(error))
    except Exception as error:
        # Unreadable answers (e.g. a non-JSON body) cannot confirm a rejection.
        return CredentialCheckResult(status=CREDENTIAL_UNVERIFIED, error=f"{type(error).__name__}: {error}")

    login = user.get("login") if isinstance(user, dict) else None
    return CredentialCheckResult(status=CREDENTIAL_VALID, login=login)
