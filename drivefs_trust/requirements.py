# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------

from os import geteuid
from os.path import isdir
from shutil import which

from .drivefs import GDRIVE_APP_PATH
from .exceptions import RequirementError

import logging

logger = logging.getLogger(__name__)

REQUIRED_COMMANDS = ('defaults', 'killall', 'open')


def check_privileges():
    """Raises RequirementError unless running as root"""
    logger.debug('Entered check_privileges()')
    if geteuid() != 0:
        raise RequirementError(
            "This tool must be run with sudo (root privileges).")


def check_requirements(notifier, commands=REQUIRED_COMMANDS,
                       app_path=GDRIVE_APP_PATH):
    """Makes sure the required tools and Google Drive are installed

    Parameters
    ----------
    notifier : drivefs_trust.notify.Notifier
        Where to report progress
    commands : iterable of str, optional
        Commands that must be found in PATH
    app_path : str, optional
        The application bundle that must exist

    Raises
    ------
    RequirementError
        If a command is missing or the application is not installed
    """
    logger.debug('Entered check_requirements()')
    notifier.info("Checking requirements...")

    for cmd in commands:
        if which(cmd) is None:
            raise RequirementError("Required command not found: %s" % cmd)

    if not isdir(app_path):
        raise RequirementError("Google Drive for Desktop not installed.")

    notifier.success("All requirements met.")
