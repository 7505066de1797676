import pytest

from strata import PackageConfig, Packages, Proc, Remove, Stub, colors


@pytest.fixture
def config():
    return PackageConfig('dnf')


def test_packages_split(config):
    packages = Packages('''
        python3.11 python3.11-pip
        glibc-langpack-en
    ''', config=config)
    assert packages.packages == ['python3.11', 'python3.11-pip', 'glibc-langpack-en']
    assert str(packages) == 'Packages(python3.11, python3.11-pip, glibc-langpack-en)'


@pytest.mark.asyncio
async def test_install_then_cleanup(config):
    target = Stub()
    await target(Packages('python3.11', 'glibc-langpack-en', config=config))
    assert target.calls == [
        'dnf install --assumeyes python3.11 glibc-langpack-en',
        'dnf clean all',
        'rm -rf /var/cache/dnf /var/lib/dnf/history* /var/log/dnf* /var/log/hawkey.log',
    ]


@pytest.mark.asyncio
async def test_remove_then_cleanup(config):
    target = Stub()
    await target(Remove('gcc', config=config))
    assert target.calls == [
        'dnf remove --assumeyes gcc',
        'dnf clean all',
        'rm -rf /var/cache/dnf /var/lib/dnf/history* /var/log/dnf* /var/log/hawkey.log',
    ]


@pytest.mark.asyncio
async def test_no_cleanup_after_failure(config):
    target = Stub(responses={'dnf install': (1, '')})
    with pytest.raises(Exception):
        await target(Packages('nope', config=config))
    assert target.calls == ['dnf install --assumeyes nope']


@pytest.mark.asyncio
async def test_apt_updates_first():
    target = Stub()
    await target(Packages('python3.11', config=PackageConfig('apt')))
    assert target.calls[:2] == [
        'apt-get -y update',
        'apt-get -y install python3.11',
    ]
    assert target.calls[-1].startswith('rm -rf /var/lib/apt/lists/*')


def test_containerfile(config):
    assert Packages('gcc', config=config).containerfile() == [
        'RUN dnf install --assumeyes gcc \\\n'
        '    && dnf clean all \\\n'
        '    && rm -rf /var/cache/dnf /var/lib/dnf/history* /var/log/dnf* /var/log/hawkey.log'
    ]


def test_cachekey_has_config():
    a = Packages('gcc', config=PackageConfig('dnf'))
    b = Packages('gcc', config=PackageConfig('dnf', docs=True))
    assert str(a) == str(b)
    assert a.cachekey() != b.cachekey()


def test_highlight():
    proc = Proc('true', regexps=Packages.regexps)
    assert proc.highlight(b'  Installing : gcc') == (
        b'  ' + colors.cyan.encode() + b'Installing'
        + colors.reset.encode() + b' : gcc' + colors.reset.encode()
    )
