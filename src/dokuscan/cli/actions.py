"""Custom argparse Action classes for the dokuscan CLI.

Every option can take its default from an environment variable named
``DOKUSCAN_<DEST>``, where ``<DEST>`` is the argument's destination in upper
case. Arguments given on the command line always win.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os

from dokuscan.constants import ENV_PREFIX

_TRUE_VALUES = ("true", "1", "yes", "on")


def _dest_from_option_strings(option_strings, dest=None):
    """Derive the destination name the way argparse does."""
    if dest is not None:
        return dest
    for option in option_strings:
        if option.startswith("--no-"):
            return option[5:].replace("-", "_")
        if option.startswith("--"):
            return option[2:].replace("-", "_")
        if option.startswith("-"):
            return option[1:]
    return None


def env_key_for(dest):
    """Return the environment variable consulted for ``dest``."""
    return f"{ENV_PREFIX}{dest.upper().replace('-', '_')}"


class EnvironmentAwareAction(argparse.Action):
    """Store action that takes its default from the environment."""

    def __init__(self, option_strings, *args, **kwargs):
        dest = _dest_from_option_strings(option_strings, kwargs.get("dest"))
        if dest:
            env_key = env_key_for(dest)
            env_value = os.environ.get(env_key)
            if env_value is not None:
                type_func = kwargs.get("type")
                try:
                    kwargs["default"] = type_func(env_value) if type_func is not None else env_value
                except (ValueError, TypeError) as e:
                    # Log warning but don't fail initialization
                    logging.warning(f"Invalid environment variable {env_key}={env_value}: {e}")

        super().__init__(option_strings, *args, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        """Standard action processing."""
        setattr(namespace, self.dest, values)


class EnvironmentAwareBooleanAction(argparse._StoreTrueAction):
    """Boolean flag that takes its default from the environment."""

    def __init__(self, option_strings, *args, **kwargs):
        dest = _dest_from_option_strings(option_strings, kwargs.get("dest"))
        if dest:
            env_value = os.environ.get(env_key_for(dest))
            if env_value is not None:
                kwargs["default"] = env_value.lower() in _TRUE_VALUES

        super().__init__(option_strings, *args, **kwargs)


class EnvironmentAwareBooleanFalseAction(argparse._StoreFalseAction):
    """``--no-*`` flag whose (positive) default comes from the environment."""

    def __init__(self, option_strings, *args, **kwargs):
        dest = _dest_from_option_strings(option_strings, kwargs.get("dest"))
        if dest:
            env_value = os.environ.get(env_key_for(dest))
            if env_value is not None:
                kwargs["default"] = env_value.lower() in _TRUE_VALUES

        super().__init__(option_strings, *args, **kwargs)


class PositiveIntAction(EnvironmentAwareAction):
    """Action that validates positive integers with environment variable support."""

    def __init__(self, option_strings, *args, **kwargs):
        kwargs.setdefault("type", int)
        super().__init__(option_strings, *args, **kwargs)
        if self.default is not None and (not isinstance(self.default, int) or self.default <= 0):
            logging.warning(f"Ignoring invalid default for {self.dest}: {self.default!r}")
            self.default = None

    def __call__(self, parser, namespace, values, option_string=None):
        """Validate and store a positive integer."""
        if values <= 0:
            parser.error(f"argument {option_string}: {values} is not a positive integer")
        setattr(namespace, self.dest, values)


def create_env_aware_argument(parser, *args, **kwargs):
    """Add an argument with automatic environment variable support.

    The environment-aware action is chosen from the requested ``action``.
    Custom action classes are passed through unchanged.
    """
    action = kwargs.get("action", "store")

    if action == "store_true":
        kwargs["action"] = EnvironmentAwareBooleanAction
    elif action == "store_false":
        kwargs["action"] = EnvironmentAwareBooleanFalseAction
    elif action in ("store", None):
        kwargs["action"] = EnvironmentAwareAction

    return parser.add_argument(*args, **kwargs)
