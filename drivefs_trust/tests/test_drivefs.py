# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------

from unittest import TestCase, main
from unittest.mock import patch

from drivefs_trust.drivefs import DefaultsTrustStore, ProcessController
from drivefs_trust.exceptions import TrustStoreError, RelaunchError

PLIST = '/Library/Preferences/com.google.drivefs.settings'


@patch('drivefs_trust.drivefs.system_call')
class DefaultsTrustStoreTests(TestCase):
    def test_get_trusted_path(self, system_call):
        system_call.return_value = ('/Users/a/Netskope Certificates/b.pem\n',
                                    '', 0)
        obs = DefaultsTrustStore().get_trusted_path()

        self.assertEqual(obs, '/Users/a/Netskope Certificates/b.pem')
        system_call.assert_called_once_with(
            ['defaults', 'read', PLIST, 'TrustedRootCertsFile'])

    def test_get_trusted_path_unset(self, system_call):
        system_call.return_value = (
            '', 'The domain/default pair does not exist\n', 1)
        self.assertIsNone(DefaultsTrustStore().get_trusted_path())

    def test_get_trusted_path_empty(self, system_call):
        system_call.return_value = ('\n', '', 0)
        self.assertIsNone(DefaultsTrustStore().get_trusted_path())

    def test_set_trusted_path(self, system_call):
        system_call.return_value = ('', '', 0)
        DefaultsTrustStore('com.example', 'Key').set_trusted_path('/b.pem')

        system_call.assert_called_once_with(
            ['defaults', 'write', 'com.example', 'Key', '/b.pem'])

    def test_set_trusted_path_error(self, system_call):
        system_call.return_value = ('', 'Could not write domain\n', 1)
        with self.assertRaisesRegex(TrustStoreError,
                                    'Could not write domain'):
            DefaultsTrustStore().set_trusted_path('/b.pem')


@patch('drivefs_trust.drivefs.system_call')
class ProcessControllerTests(TestCase):
    def test_terminate(self, system_call):
        system_call.return_value = ('', '', 0)
        ProcessController().terminate()

        system_call.assert_called_once_with(
            ['killall', '-9', 'Google Drive', 'Google Drive Helper'])

    def test_terminate_not_running(self, system_call):
        system_call.return_value = ('', 'No matching processes\n', 1)
        # not an error
        ProcessController().terminate()

    def test_launch(self, system_call):
        system_call.return_value = ('', '', 0)
        ProcessController(app_name='Drive').launch()

        system_call.assert_called_once_with(['open', '-a', 'Drive'])

    def test_launch_error(self, system_call):
        system_call.return_value = ('', 'Unable to find application\n', 1)
        with self.assertRaisesRegex(RelaunchError, 'open the app manually'):
            ProcessController().launch()


if __name__ == '__main__':
    main()
