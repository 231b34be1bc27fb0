# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------

import time
from os import makedirs, replace
from os.path import exists, isfile

from .drivefs import RESTART_SETTLE_TIME
from .exceptions import RelaunchError
from .fetcher import tenant_sources
from .util import file_digest, remove_if_exists

import logging

logger = logging.getLogger(__name__)

REPLACED = 'replaced'
UP_TO_DATE = 'up_to_date'


class Outcome(object):
    """Result of a reconciliation

    Parameters
    ----------
    action : str, {'replaced', 'up_to_date'}
        Whether the bundle was replaced or left alone
    bundle_path : str
        The canonical bundle path
    new_digest : str
        Digest of the freshly built bundle
    old_digest : str, optional
        Digest of the previously trusted bundle, None if there was none
    restarted : bool, optional
        Whether the application was started again
    relaunch_error : RelaunchError, optional
        The error raised while starting the application, if any
    """
    def __init__(self, action, bundle_path, new_digest, old_digest=None,
                 restarted=False, relaunch_error=None):
        self.action = action
        self.bundle_path = bundle_path
        self.new_digest = new_digest
        self.old_digest = old_digest
        self.restarted = restarted
        self.relaunch_error = relaunch_error

    @property
    def replaced(self):
        return self.action == REPLACED

    @property
    def success(self):
        """False when the configuration changed but the relaunch failed"""
        return self.relaunch_error is None

    def __repr__(self):
        return 'Outcome(action=%r, restarted=%r, success=%r)' % (
            self.action, self.restarted, self.success)


class BundleReconciler(object):
    """Keeps Google Drive's trusted bundle in sync with the tenant's CAs

    Parameters
    ----------
    config : drivefs_trust.config.TrustConfig
        The run configuration
    fetcher : drivefs_trust.fetcher.CertificateFetcher
        Downloads the certificate sources
    trust_store : drivefs_trust.drivefs.DefaultsTrustStore
        Reads and writes the trusted bundle setting
    controller : drivefs_trust.drivefs.ProcessController
        Restarts the application
    notifier : drivefs_trust.notify.Notifier
        Receives the status lines
    settle_time : float, optional
        Seconds to wait between stopping and starting the application
    sleep : callable, optional
        Used to wait `settle_time`, defaults to time.sleep

    Raises
    ------
    ValidationError
        If `config` still holds placeholder values
    """
    def __init__(self, config, fetcher, trust_store, controller, notifier,
                 settle_time=RESTART_SETTLE_TIME, sleep=None):
        logger.debug('Entered BundleReconciler.__init__()')
        config.validate()
        self.config = config
        self.fetcher = fetcher
        self.trust_store = trust_store
        self.controller = controller
        self.notifier = notifier
        self.settle_time = settle_time
        self._sleep = sleep if sleep is not None else time.sleep

    def reconcile(self):
        """Builds the bundle and swaps it in if it changed

        Returns
        -------
        Outcome
            What was done

        Raises
        ------
        FetchError
            If any source can't be downloaded. Nothing is written to the
            canonical path and the temporary bundle is removed
        TrustStoreError
            If the new path can't be written to the application settings
        """
        logger.debug('Entered BundleReconciler.reconcile()')
        temp_fp = self.config.temp_cert_path
        cert_fp = self.config.cert_path

        self.build_bundle()
        new_digest = file_digest(temp_fp)
        old_digest = self.current_digest()

        if old_digest is not None:
            self.notifier.info("Current bundle hash:\n%s" % old_digest)
            self.notifier.info("New bundle hash:\n%s" % new_digest)
            if old_digest == new_digest:
                self.notifier.info(
                    "Temporary bundle is identical to the existing bundle.")
                remove_if_exists(temp_fp)
                self.notifier.success("Certificate bundle is up to date.")
                return Outcome(UP_TO_DATE, cert_fp, new_digest,
                               old_digest=old_digest)
            self.notifier.info(
                "Temporary bundle differs from the existing bundle.")
        else:
            self.notifier.info("No valid certificate bundle and/or folder "
                               "location configured.")

        self.notifier.info("Replacing old bundle with new one...")
        if old_digest is not None:
            self.notifier.info("Old bundle hash:\n%s" % old_digest)
        else:
            self.notifier.info("Old bundle: none")
        self.notifier.info("New bundle hash:\n%s" % new_digest)

        # a rename within the same directory is atomic, so the canonical
        # path never holds a partial bundle
        replace(temp_fp, cert_fp)
        self.notifier.success("Certificate bundle is up to date.")

        self.trust_store.set_trusted_path(cert_fp)
        self.notifier.success(
            "Google Drive configured to trust:\n%s" % cert_fp)

        relaunch_error = self.restart()
        return Outcome(REPLACED, cert_fp, new_digest, old_digest=old_digest,
                       restarted=relaunch_error is None,
                       relaunch_error=relaunch_error)

    def build_bundle(self):
        """Downloads the three sources into the temporary bundle

        Raises
        ------
        FetchError
            If a source can't be downloaded
        """
        logger.debug('Entered BundleReconciler.build_bundle()')
        cfg = self.config
        if not exists(cfg.cert_dir):
            makedirs(cfg.cert_dir)
        remove_if_exists(cfg.temp_cert_path)

        self.notifier.info(
            "Creating temporary certificate bundle:\n%s" % cfg.temp_cert_path)
        sources = tenant_sources(cfg.tenant_name, cfg.org_key,
                                 cfg.public_ca_url)
        try:
            with open(cfg.temp_cert_path, 'wb') as f:
                for source in sources:
                    f.write(self.fetcher.fetch(source))
        except Exception:
            # a partial bundle never outlives a failed build
            remove_if_exists(cfg.temp_cert_path)
            raise

    def current_digest(self):
        """Digest of the bundle Google Drive currently trusts

        Returns
        -------
        str or None
            None if no path is configured, the file does not exist or it
            can't be read
        """
        logger.debug('Entered BundleReconciler.current_digest()')
        current_fp = self.trust_store.get_trusted_path()
        if not current_fp or not isfile(current_fp):
            return None
        try:
            return file_digest(current_fp)
        except (IOError, OSError) as e:
            logger.debug("Can't read %s: %s" % (current_fp, str(e)))
            return None

    def restart(self):
        """Stops Google Drive and starts it again

        Returns
        -------
        RelaunchError or None
            The error raised while launching the application, if any
        """
        logger.debug('Entered BundleReconciler.restart()')
        self.notifier.info("Restarting Google Drive to apply changes")
        self.controller.terminate()
        self._sleep(self.settle_time)
        try:
            self.controller.launch()
        except RelaunchError as e:
            self.notifier.error(str(e))
            return e
        self.notifier.success("Google Drive restarted successfully.")
        return None


def reconcile(config, fetcher, trust_store, controller, notifier):
    """Shortcut for BundleReconciler(...).reconcile()"""
    return BundleReconciler(config, fetcher, trust_store, controller,
                            notifier).reconcile()
