# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------

from .exceptions import TrustStoreError, RelaunchError
from .util import system_call

import logging

logger = logging.getLogger(__name__)

GDRIVE_PLIST = '/Library/Preferences/com.google.drivefs.settings'
TRUSTED_CERTS_KEY = 'TrustedRootCertsFile'
GDRIVE_APP_NAME = 'Google Drive'
GDRIVE_APP_PATH = '/Applications/Google Drive.app'
GDRIVE_PROCESS_NAMES = ('Google Drive', 'Google Drive Helper')
# seconds between stopping Google Drive and starting it again
RESTART_SETTLE_TIME = 5


class DefaultsTrustStore(object):
    """Google Drive's trusted root certificates setting

    Reads and writes a single key of a macOS preferences domain through the
    `defaults` tool.

    Parameters
    ----------
    domain : str, optional
        The preferences domain or plist path
    key : str, optional
        The key holding the path of the trusted bundle
    """
    def __init__(self, domain=GDRIVE_PLIST, key=TRUSTED_CERTS_KEY):
        self.domain = domain
        self.key = key

    def get_trusted_path(self):
        """The bundle path currently configured

        Returns
        -------
        str or None
            The configured path, or None if the key is not set or the
            domain can't be read
        """
        logger.debug('Entered DefaultsTrustStore.get_trusted_path()')
        stdout, stderr, return_value = system_call(
            ['defaults', 'read', self.domain, self.key])
        if return_value != 0:
            logger.debug('defaults read failed: %s' % stderr)
            return None
        value = stdout.strip()
        return value if value else None

    def set_trusted_path(self, path):
        """Points the setting to `path`

        Raises
        ------
        TrustStoreError
            If `defaults write` fails
        """
        logger.debug('Entered DefaultsTrustStore.set_trusted_path(%s)' % path)
        stdout, stderr, return_value = system_call(
            ['defaults', 'write', self.domain, self.key, path])
        if return_value != 0:
            raise TrustStoreError(
                "Couldn't write %s to %s: %s"
                % (self.key, self.domain, stderr.strip()))


class ProcessController(object):
    """Stops and starts the target application

    Parameters
    ----------
    process_names : iterable of str, optional
        The names of the processes to terminate
    app_name : str, optional
        The application to launch
    """
    def __init__(self, process_names=GDRIVE_PROCESS_NAMES,
                 app_name=GDRIVE_APP_NAME):
        self.process_names = list(process_names)
        self.app_name = app_name

    def terminate(self):
        """Kills the known processes; processes that are not running are
        ignored"""
        logger.debug('Entered ProcessController.terminate()')
        stdout, stderr, return_value = system_call(
            ['killall', '-9'] + self.process_names)
        logger.debug('killall returned %d: %s' % (return_value, stderr))

    def launch(self):
        """Starts the application

        Raises
        ------
        RelaunchError
            If the application can't be opened
        """
        logger.debug('Entered ProcessController.launch()')
        stdout, stderr, return_value = system_call(
            ['open', '-a', self.app_name])
        if return_value != 0:
            raise RelaunchError(
                "Failed to restart %s. Please open the app manually. (%s)"
                % (self.app_name, stderr.strip()))
