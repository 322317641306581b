"""Pick the first configured scope whose files exist and run its commands."""

import os
import subprocess
import sys
from dataclasses import dataclass, field


class RunnerError(Exception):
    """The configuration could not be read or a scope could not run."""


def _exists(path):
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError as error:
        raise RunnerError(f"Error searching for path: {error}") from error
    return True


@dataclass
class Config:
    """One scope: required files, candidate files, commands and environment."""

    name: str
    has: list = field(default_factory=list)
    find_any: list = field(default_factory=list)
    commands: list = field(default_factory=list)
    env: list = field(default_factory=list)

    @classmethod
    def from_text(cls, content):
        """Parse a scope: its ``name]`` line followed by ``setting=values`` lines."""
        scope, *lines = content.split("\n")
        if not scope:
            raise RunnerError("non-empty line doens't have '=' to set a variable")
        config = cls(scope[:-1])
        for line in lines:
            if not line:
                continue
            name, sep, values = line.partition("=")
            if not sep:
                raise RunnerError("Can't read scope setter")
            config.append(name, values)
        return config

    def append(self, name, values):
        """Add ``values`` to the setting ``name``; lists are split on ':'."""
        if name == "env":
            env_name, sep, env_value = values.partition(" ")
            if not sep:
                raise RunnerError(
                    f"env `{values}` definition must contain space to split name and value"
                )
            self.env.append((env_name, env_value))
            return
        parts = values.split(":")
        if name == "has":
            self.has.append(parts)
        elif name == "findAny":
            self.find_any.extend(parts)
        elif name == "exec":
            self.commands.extend(parts)
        else:
            raise RunnerError(f'Unknown name "{name}"')

    def find(self):
        """Return the first ``findAny`` path that exists."""
        for path in self.find_any:
            if _exists(path):
                return path
        raise RunnerError("Can't find single findAny file")

    def verify(self, verbose):
        """Return whether every ``has`` group has an existing path.

        Raises if ``findAny`` is set but none of its paths exists.
        """
        for group in self.has:
            if not any(_exists(path) for path in group):
                return False
        if self.find_any:
            self.find()
        return True

    def execute(self):
        """Run each command with ``/bin/sh``; ``$found`` holds the found file."""
        found = self.find() if self.find_any else None
        env = dict(os.environ)
        if found is not None:
            env["found"] = found
        env.update(self.env)
        for cmd in self.commands:
            try:
                child = subprocess.Popen(["/bin/sh", "-c", cmd], env=env)
            except OSError as error:
                raise RunnerError(f"Can't spawn process `{cmd}`: {error}") from error
            try:
                child.wait()
            except OSError as error:
                raise RunnerError(f"Can't execute process `{cmd}`: {error}") from error


def read_configs(content):
    """Split a file into ``[name]`` scopes and parse each of them."""
    scopes = [scope for scope in content.split("\n[") if scope]
    return [Config.from_text(scope.removeprefix("[")) for scope in scopes]


def help_text(progname):
    return (
        f"usage $ {progname or 'run'}\n"
        "\t[-v | --verify] prints what scope \x1b[3mwould\x1b[0m run\n"
        "\t[-V | -vv | --verbose_verify] prints what scope would run, \x1b[3mand why\x1b[0m\n"
        "\t[-h | --help] prints this\n"
        "\t[-c \x1b[3mconfigfile\x1b[0m | --config \x1b[3mconfigfile\x1b[0m] use "
        "\x1b[3mconfigfile\x1b[0m instead of $HOME/.config.runner.cfg"
    )


def _run(args, progname):
    config_file = None
    verify = verbose = show_help = False
    words = iter(args)
    for arg in words:
        if arg in ("-h", "--help"):
            show_help = True
        elif arg in ("-v", "--verify"):
            verify = True
        elif arg in ("-V", "-vv", "--verbose_verify"):
            verbose = True
        elif arg in ("-c", "--config"):
            config_file = next(words, None)
            if config_file is None:
                raise RunnerError("--config must provide config file")
        elif arg != "-":
            print(help_text(progname))
            raise RunnerError(f"Unknown argument '{arg}'")

    if show_help:
        print(help_text(progname))
        return

    if config_file is None:
        home = os.environ.get("HOME")
        if home is None:
            raise RunnerError("can't read $HOME")
        config_file = f"{home}/.config/runner.cfg"
    try:
        with open(config_file, encoding="utf-8") as handle:
            content = handle.read()
    except (OSError, UnicodeDecodeError) as error:
        raise RunnerError(f"can't read file {config_file}: {error}") from error

    scope = next((c for c in read_configs(content) if c.verify(verbose)), None)
    if scope is None:
        raise RunnerError(f"Can't find single run scope from {config_file}")
    if verify or verbose:
        print(f"Found scope {scope.name}")
    else:
        scope.execute()


def main(argv=None):
    progname = sys.argv[0] if argv is None else None
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        _run(args, progname)
    except RunnerError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())