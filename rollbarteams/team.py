"""Client operations for Rollbar teams and their user and project links."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Iterable

import requests

log = logging.getLogger(__name__)

PATH_TEAM_CREATE = "/api/1/teams"
PATH_TEAM_LIST = "/api/1/teams"
PATH_TEAM_READ = "/api/1/team/{team_id}"
PATH_TEAM_DELETE = "/api/1/team/{team_id}"
PATH_TEAM_USER = "/api/1/team/{team_id}/user/{user_id}"
PATH_TEAM_PROJECT = "/api/1/team/{team_id}/project/{project_id}"

TOKEN_HEADER = "X-Rollbar-Access-Token"
SYSTEM_TEAM_NAMES = frozenset({"Everyone", "Owners"})


class RollbarError(Exception):
    """An error reported by the Rollbar API or while talking to it."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(RollbarError):
    """The requested object does not exist."""


@dataclass(frozen=True)
class Team:
    """A Rollbar team."""

    id: int = 0
    account_id: int = 0
    name: str = ""
    access_level: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Team":
        """Build a team from an API result object."""
        return cls(
            id=int(data.get("id") or 0),
            account_id=int(data.get("account_id") or 0),
            name=data.get("name") or "",
            access_level=data.get("access_level") or "",
        )


def filter_system_teams(teams: Iterable[Team]) -> list[Team]:
    """Drop the system teams "Everyone" and "Owners"."""
    return [t for t in teams if t.name not in SYSTEM_TEAM_NAMES]


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.text or resp.reason or f"HTTP {resp.status_code}"


def _raise_for_response(resp: requests.Response) -> None:
    if resp.status_code < 400:
        return
    message = _error_message(resp)
    if resp.status_code == 404:
        raise NotFoundError(message, resp.status_code)
    raise RollbarError(message, resp.status_code)


class TeamClient:
    """Rollbar API client for team operations."""

    def __init__(
        self,
        token: str,
        base_url: str,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.session.headers[TOKEN_HEADER] = token
        self._lock = threading.Lock()

    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self.base_url + path
        try:
            return self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise RollbarError(str(exc)) from exc

    def create_team(self, name: str, level: str) -> Team:
        """Create a new team with the given access level."""
        with self._lock:
            log.debug("Creating new team name=%s access_level=%s", name, level)
            if not name:
                raise ValueError("name cannot be blank")
            resp = self._send(
                "POST",
                PATH_TEAM_CREATE,
                json={"name": name, "access_level": level},
            )
            _raise_for_response(resp)
            team = Team.from_dict(resp.json().get("result") or {})
            log.debug("Successfully created new team id=%d", team.id)
            return team

    def list_teams(self) -> list[Team]:
        """List all teams, system teams included."""
        with self._lock:
            log.debug("Listing all teams")
            resp = self._send("GET", PATH_TEAM_LIST)
            _raise_for_response(resp)
            teams = [Team.from_dict(d) for d in resp.json().get("result") or []]
            log.debug("Successfully listed teams count=%d", len(teams))
            return teams

    def list_custom_teams(self) -> list[Team]:
        """List all teams except "Everyone" and "Owners"."""
        log.debug("Listing custom teams")
        teams = filter_system_teams(self.list_teams())
        log.debug("Successfully listed custom teams count=%d", len(teams))
        return teams

    def read_team(self, team_id: int) -> Team:
        """Read one team; raises NotFoundError if it does not exist."""
        with self._lock:
            log.debug("Reading team id=%d", team_id)
            if team_id == 0:
                raise ValueError("id must be non-zero")
            resp = self._send("GET", PATH_TEAM_READ.format(team_id=team_id))
            _raise_for_response(resp)
            team = Team.from_dict(resp.json().get("result") or {})
            log.debug("Successfully read team id=%d name=%s", team.id, team.name)
            return team

    def delete_team(self, team_id: int) -> None:
        """Delete a team; raises NotFoundError if it does not exist."""
        with self._lock:
            log.debug("Deleting team id=%d", team_id)
            if team_id == 0:
                raise ValueError("id must be non-zero")
            resp = self._send("DELETE", PATH_TEAM_DELETE.format(team_id=team_id))
            _raise_for_response(resp)
            log.debug("Successfully deleted team id=%d", team_id)

    def assign_user_to_team(self, team_id: int, user_id: int) -> None:
        """Add a user to a team."""
        with self._lock:
            log.debug("Assigning user %d to team %d", user_id, team_id)
            resp = self._send(
                "PUT", PATH_TEAM_USER.format(team_id=team_id, user_id=user_id)
            )
            # The API answers 403 when the team or the user does not exist.
            if resp.status_code == 403:
                raise NotFoundError(_error_message(resp), resp.status_code)
            _raise_for_response(resp)
            log.debug("Successfully assigned user to team")

    def is_user_assigned_to_team(self, team_id: int, user_id: int) -> bool:
        """Tell whether a user is a member of a team."""
        with self._lock:
            log.debug("Checking if user %d is assigned to team %d", user_id, team_id)
            resp = self._send(
                "GET", PATH_TEAM_USER.format(team_id=team_id, user_id=user_id)
            )
            if resp.status_code == 404:
                log.debug("User is not assigned to the team")
                return False
            _raise_for_response(resp)
            log.debug("User is assigned to the team")
            return True

    def remove_user_from_team(self, user_id: int, team_id: int) -> None:
        """Remove a user from a team."""
        with self._lock:
            log.debug("Removing user %d from team %d", user_id, team_id)
            resp = self._send(
                "DELETE", PATH_TEAM_USER.format(team_id=team_id, user_id=user_id)
            )
            # The API answers 422 when the team or the user does not exist.
            if resp.status_code == 422:
                raise NotFoundError(_error_message(resp), resp.status_code)
            _raise_for_response(resp)
            log.debug("Successfully removed user from team")

    def find_team_id(self, name: str) -> int:
        """Return the ID of the team with this name."""
        log.debug("Finding team ID team_name=%s", name)
        for team in self.list_teams():
            if team.name == name:
                log.debug("Found team ID %d", team.id)
                return team.id
        raise NotFoundError(f"no team named {name!r}")

    def assign_team_to_project(self, team_id: int, project_id: int) -> None:
        """Give a team access to a project."""
        with self._lock:
            log.debug("Assigning team %d to project %d", team_id, project_id)
            resp = self._send(
                "PUT",
                PATH_TEAM_PROJECT.format(team_id=team_id, project_id=project_id),
            )
            _raise_for_response(resp)
            log.debug("Successfully assigned team to project")

    def remove_team_from_project(self, team_id: int, project_id: int) -> None:
        """Take a team's access to a project away."""
        with self._lock:
            log.debug("Removing team %d from project %d", team_id, project_id)
            resp = self._send(
                "DELETE",
                PATH_TEAM_PROJECT.format(team_id=team_id, project_id=project_id),
            )
            _raise_for_response(resp)
            log.debug("Successfully removed team from project")