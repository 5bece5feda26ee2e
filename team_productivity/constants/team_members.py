from team_productivity.schemas.team import Level, TeamMember

TEAM_FUNDING = "DS"
TEAM_LENDING = "SLS"

BOARD_DS = 143
BOARD_SLS = 142
BOARD_BUZZ = 177
KNOWN_BOARDS = (BOARD_DS, BOARD_SLS, BOARD_BUZZ)

TEAM_MEMBERS = [
    TeamMember(
        name="Lekha",
        account_id="615ac0fda707100069885ad5",
        email="lekha@example.com",
        teams=frozenset({TEAM_FUNDING, TEAM_LENDING}),
        level=Level.JUNIOR,
    ),
    TeamMember(
        name="Tasrifin",
        account_id="712020:1d6d1b04-9241-4007-8159-cf44b72ba81f",
        email="tasrifin@example.com",
        teams=frozenset({TEAM_LENDING}),
        level=Level.MEDIOR,
    ),
    TeamMember(
        name="Luqman",
        account_id="712020:2fe52388-cf5e-4930-be5f-58495306745f",
        email="luqman@example.com",
        teams=frozenset({TEAM_LENDING}),
        level=Level.SENIOR,
    ),
    TeamMember(
        name="Irvandy",
        account_id="712020:6a8b3a76-88aa-44f2-b2db-43e254f9af7a",
        email="irvandy@example.com",
        teams=frozenset({TEAM_FUNDING, TEAM_LENDING}),
        level=Level.MEDIOR,
    ),
    TeamMember(
        name="Echa",
        account_id="5d026d1b906a670bc885315f",
        email="echa@example.com",
        teams=frozenset({TEAM_LENDING}),
        level=Level.SENIOR,
    ),
    TeamMember(
        name="Nurul",
        account_id="712020:7e4ff2fd-a621-4fee-a335-3fa34b326d4b",
        email="nurul@example.com",
        teams=frozenset({TEAM_FUNDING}),
        level=Level.INDIVIDUAL_CONTRIBUTOR,
    ),
]


def members_of(team: str, members=None) -> list[TeamMember]:
    """Configured members belonging to the given team code."""
    members = TEAM_MEMBERS if members is None else members
    return [member for member in members if team in member.teams]
