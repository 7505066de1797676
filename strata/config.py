import shlex

from .exceptions import ParameterError


class PackageConfig:
    """
    Package manager configuration, passed explicitly to every step that
    installs or removes packages.

    The Configure action persists the settings into the snapshot, so that
    they also hold for anything running the package manager afterwards.
    Commands rendered here carry nothing that depends on hidden state, the
    whole configuration is visible in ``str(config)``.
    """

    mgrs = dict(
        dnf=dict(
            update=None,
            install='dnf install --assumeyes',
            remove='dnf remove --assumeyes',
            clean='dnf clean all',
            purge=(
                '/var/cache/dnf',
                '/var/lib/dnf/history*',
                '/var/log/dnf*',
                '/var/log/hawkey.log',
            ),
            query="rpm -qa --queryformat '%{NAME}\\n'",
            docs=('/etc/dnf/dnf.conf', 'tsflags=nodocs'),
            weak=('/etc/dnf/dnf.conf', 'install_weak_deps=False'),
        ),
        microdnf=dict(
            update=None,
            install='microdnf install --assumeyes',
            remove='microdnf remove --assumeyes',
            clean='microdnf clean all',
            purge=(
                '/var/cache/yum',
                '/var/lib/dnf/history*',
                '/var/log/dnf*',
                '/var/log/hawkey.log',
            ),
            query="rpm -qa --queryformat '%{NAME}\\n'",
            docs=('/etc/dnf/dnf.conf', 'tsflags=nodocs'),
            weak=('/etc/dnf/dnf.conf', 'install_weak_deps=0'),
        ),
        apt=dict(
            update='apt-get -y update',
            install='apt-get -y install',
            remove='apt-get -y purge --auto-remove',
            clean='apt-get clean',
            purge=(
                '/var/lib/apt/lists/*',
                '/var/log/apt/*',
                '/var/log/dpkg.log',
            ),
            query="dpkg-query -W -f '${Package}\\n'",
            docs=(
                '/etc/dpkg/dpkg.cfg.d/90strata',
                'path-exclude=/usr/share/doc/*',
            ),
            weak=(
                '/etc/apt/apt.conf.d/90strata',
                'APT::Install-Recommends "false";',
            ),
        ),
    )

    def __init__(self, mgr='dnf', docs=False, weak_deps=False):
        if mgr not in self.mgrs:
            raise ParameterError(
                f'Unsupported package manager {mgr}, supported: '
                + ', '.join(self.mgrs)
            )
        self.mgr = mgr
        self.docs = docs
        self.weak_deps = weak_deps
        self.cmds = self.mgrs[mgr]

    def settings(self):
        """Return (path, line) pairs to persist in the snapshot."""
        settings = []
        if not self.docs:
            settings.append(self.cmds['docs'])
        if not self.weak_deps:
            settings.append(self.cmds['weak'])
        return settings

    def install(self, *packages):
        cmds = []
        if self.cmds['update']:
            cmds.append(self.cmds['update'])
        cmds.append(self.cmds['install'] + ' ' + shlex.join(packages))
        return cmds

    def remove(self, *packages):
        return [self.cmds['remove'] + ' ' + shlex.join(packages)]

    def clean(self):
        """Commands clearing caches, history and logs, safe to run twice."""
        return [
            self.cmds['clean'],
            'rm -rf ' + ' '.join(self.cmds['purge']),
        ]

    @property
    def query(self):
        return self.cmds['query']

    def __str__(self):
        return (
            f'PackageConfig({self.mgr}, docs={self.docs},'
            f' weak_deps={self.weak_deps})'
        )
