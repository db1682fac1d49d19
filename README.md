# rollbarteams

A small client for the Rollbar API that manages teams: creating, listing,
reading and deleting teams, adding users to teams and removing them, and
assigning teams to projects.

## Installation

```
pip install rollbarteams
```

## Usage

Everything lives in the module `rollbarteams.team`. A `TeamClient` takes an
access token and the base URL of the API; an optional `requests.Session` may
be passed as the third argument. The token is sent in the
`X-Rollbar-Access-Token` header of every request.

```python
from rollbarteams.team import TeamClient, NotFoundError, RollbarError

client = TeamClient("token", "https://rollbar.example.com")

team = client.create_team("backend", "standard")
print(team.id, team.account_id, team.name, team.access_level)

for team in client.list_custom_teams():   # leaves out "Everyone" and "Owners"
    print(team.name)

team_id = client.find_team_id("backend")
client.assign_user_to_team(team_id, 238101)
assert client.is_user_assigned_to_team(team_id, 238101)
client.remove_user_from_team(238101, team_id)   # note: user ID first

client.assign_team_to_project(team_id, 423092)
client.remove_team_from_project(team_id, 423092)

client.delete_team(team_id)
```

`Team` is a frozen dataclass with `id`, `account_id`, `name` and
`access_level`; `Team.from_dict` builds one from an API result object.
`filter_system_teams` drops the "Everyone" and "Owners" teams from any
iterable of teams and returns a list.

Calls that make a single request hold the client's lock for the length of
that request, so one client can be shared between threads.

## Errors

* `NotFoundError` (a subclass of `RollbarError`) is raised when the API
  answers `404`, when `find_team_id` finds no team of that name, and where
  the API reports a missing team or user with a `403` (assigning a user) or
  `422` (removing a user) status.
* `RollbarError` is raised for any other error response from the API and
  for connection failures. Its `status_code` attribute holds the HTTP
  status, or `None` when no response was received.
* `ValueError` is raised for an empty team name in `create_team` or a team
  ID of zero in `read_team` and `delete_team`, before any request is made.

`is_user_assigned_to_team` returns `False` rather than raising when the API
answers `404`.

## What it does not do

The package only deals with teams. It has no calls for projects, project
access tokens, users or invitations themselves, it cannot rename a team or
change its access level, and it offers no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```