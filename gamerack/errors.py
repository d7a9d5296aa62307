class GameRackError(Exception):
    """Base class for everything the launcher reports to the user."""


# ── config ───────────────────────────────────────────────────────────────────

class ConfigError(GameRackError):
    pass


# ── tag queries ──────────────────────────────────────────────────────────────

class QueryError(GameRackError):
    pass

class EmptyTermError(QueryError):
    def __init__(self, query: str):
        super().__init__(f"Empty tag in query: {query!r}")
        self.query = query

class BareNegationError(QueryError):
    def __init__(self, query: str):
        super().__init__(f"'!' must be followed by a tag name: {query!r}")
        self.query = query


# ── launching ────────────────────────────────────────────────────────────────

class LaunchError(GameRackError):
    pass

class UnknownGameId(LaunchError):
    def __init__(self, game_id: str):
        super().__init__(f"No such game: {game_id}")
        self.game_id = game_id

class UnknownDirectoryKey(LaunchError):
    def __init__(self, game_id: str, key: str):
        super().__init__(f"Game {game_id} has nonexistent directory prefix: {key}")
        self.game_id = game_id
        self.key = key

class NoBackendConfigured(LaunchError):
    def __init__(self, game_id: str):
        super().__init__(
            f"Game {game_id} has no cmd, wine_exe, dosbox_config or scummvm_id"
        )
        self.game_id = game_id

class NoMatchingGames(LaunchError):
    def __init__(self, query: str = ""):
        msg = f"No installed games match: {query}" if query else "No installed games"
        super().__init__(msg)
        self.query = query

class ExecutableNotFound(LaunchError):
    def __init__(self, program: str):
        super().__init__(f"Executable not found: {program}")
        self.program = program

class PermissionDenied(LaunchError):
    def __init__(self, program: str):
        super().__init__(f"Permission denied: {program}")
        self.program = program

class WorkingDirectoryNotFound(LaunchError):
    def __init__(self, path: str):
        super().__init__(f"Could not change directory to: {path}")
        self.path = path

class NoEditor(LaunchError):
    def __init__(self):
        super().__init__("No default editor in $EDITOR")
