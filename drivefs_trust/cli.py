# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------

import sys
from datetime import datetime
from os.path import exists

from .config import default_config_fp, generate_config, load_config
from .drivefs import DefaultsTrustStore, ProcessController
from .exceptions import DriveTrustError, ValidationError
from .fetcher import CertificateFetcher
from .notify import ConsoleSink, Notifier, sinks_for_mode
from .reconciler import BundleReconciler
from .requirements import check_privileges, check_requirements

import logging

logger = logging.getLogger(__name__)

TIME_FMT = '%Y-%m-%d %H:%M:%S'


def display_current_config(trust_store, notifier):
    """Reports the bundle path Google Drive currently trusts"""
    current = trust_store.get_trusted_path()
    if current is None:
        current = "%s not configured/readable" % trust_store.key
    notifier.info("Current %s Configuration:\n%s" % (trust_store.key, current))


def run(config, notifier, fetcher=None, trust_store=None, controller=None):
    """Reconciles the bundle and reports the resulting configuration

    Returns
    -------
    int
        The exit status: 0 on success, 1 if the application couldn't be
        restarted
    """
    logger.debug('Entered run()')
    if fetcher is None:
        fetcher = CertificateFetcher(verify=not config.allow_insecure_ssl,
                                     timeout=config.timeout)
    trust_store = trust_store if trust_store else DefaultsTrustStore()
    controller = controller if controller else ProcessController()

    reconciler = BundleReconciler(config, fetcher, trust_store, controller,
                                  notifier)
    outcome = reconciler.reconcile()
    display_current_config(trust_store, notifier)
    if not outcome.success:
        return 1
    notifier.success("Configuration complete!")
    return 0


def main(conf_fp=None):
    """Entry point of the drivefs-trust command

    Parameters
    ----------
    conf_fp : str, optional
        The configuration file, defaults to
        drivefs_trust.config.default_config_fp()

    Returns
    -------
    int
        The exit status
    """
    conf_fp = conf_fp if conf_fp else default_config_fp()
    # until the configuration is loaded the status only goes to the console
    notifier = Notifier([ConsoleSink()])
    notifier.info("Script started at %s" % datetime.now().strftime(TIME_FMT))

    try:
        if not exists(conf_fp):
            generate_config(conf_fp)
            notifier.info("Configuration template written to:\n%s" % conf_fp)
        config = load_config(conf_fp)
        config.validate()

        notifier.close()
        notifier = Notifier(sinks_for_mode(config.log_mode, config.log_file))
        notifier.info("Starting Google Drive + Netskope SSL Certificate "
                      "Trust configuration...")
        check_privileges()
        check_requirements(notifier)
        status = run(config, notifier)
    except ValidationError as e:
        notifier.error(str(e))
        notifier.error("Please edit the configuration file:\n%s" % conf_fp)
        status = 1
    except DriveTrustError as e:
        notifier.error(str(e))
        status = 1
    else:
        if config.file_logging:
            notifier.info("Log written to: %s" % config.log_file)

    notifier.info("Script ended at %s" % datetime.now().strftime(TIME_FMT))
    notifier.close()
    return status


if __name__ == '__main__':
    sys.exit(main())
