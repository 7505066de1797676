import hashlib
import json
from pathlib import Path

import pytest

from strata import Buildah, Output, Run, Step, Stub


@pytest.fixture(autouse=True)
def runnable(monkeypatch):
    monkeypatch.setattr(Buildah, 'is_runnable', lambda self: True)
    for name in Buildah.ENV_TAGS:
        monkeypatch.delenv(name, raising=False)


def layer(prefix, key):
    return 'layer-' + hashlib.sha1((prefix + key).encode('utf8')).hexdigest()


def buildah(*steps, responses=None, base='alpine'):
    parent = Stub(responses={
        'buildah from': (0, 'ctr1'),
        'buildah mount': (0, '/mnt/ctr1'),
        **(responses or {}),
    })
    return Buildah(
        *steps,
        base=base,
        commit='python311',
        parent=parent,
        output=Output(debug=False),
    )


def steps():
    return [
        Step('first', Run('echo first')),
        Step('second', Run('echo second')),
    ]


@pytest.mark.asyncio
async def test_build():
    target = buildah(*steps())
    assert not await target()

    first = layer('alpine:latest', 'first Run(echo first)')
    second = layer(first, 'second Run(echo second)')
    assert target.parent.calls == [
        'buildah images --json',
        'buildah from alpine',
        'buildah mount ctr1',
        'buildah run ctr1 -- sh -euc echo first',
        f'buildah commit --format=oci ctr1 python311:{first}',
        'buildah run ctr1 -- sh -euc echo second',
        f'buildah commit --format=oci ctr1 python311:{second}',
        'buildah umount ctr1',
        'buildah commit --format=oci ctr1 python311:final',
        'buildah tag python311:final python311:latest',
        'buildah rm ctr1',
    ]
    assert target.root == Path('/mnt/ctr1')


@pytest.mark.asyncio
async def test_failure():
    target = buildah(*steps(), responses={'echo second': (1, '')})
    assert await target()
    calls = target.parent.calls
    assert 'buildah commit --format=oci ctr1 python311:final' not in calls
    assert len([c for c in calls if c.startswith('buildah commit')]) == 1
    assert calls[-2:] == ['buildah umount ctr1', 'buildah rm ctr1']
    assert [r.status for r in target.results] == [
        'success', 'success', 'failure', 'failure']


@pytest.mark.asyncio
async def test_layers_are_reproducible():
    first = buildah(*steps())
    await first()
    second = buildah(*steps())
    await second()
    assert first.parent.calls == second.parent.calls


@pytest.mark.asyncio
async def test_cached():
    first = layer('alpine:latest', 'first Run(echo first)')
    images = json.dumps([
        dict(names=[f'localhost/python311:{first}']),
        dict(names=['localhost/python311:layer-obsolete']),
        dict(names=['docker.io/library/alpine:latest']),
    ])
    target = buildah(*steps(), responses={'buildah images': (0, images)})
    assert not await target()

    assert target.results[0].status == 'cached'
    calls = target.parent.calls
    assert 'buildah rmi localhost/python311:layer-obsolete' in calls
    assert f'buildah from localhost/python311:{first}' in calls
    assert 'buildah run ctr1 -- sh -euc echo first' not in calls
    assert 'buildah run ctr1 -- sh -euc echo second' in calls
    second = layer(first, 'second Run(echo second)')
    assert f'buildah commit --format=oci ctr1 python311:{second}' in calls


@pytest.mark.asyncio
async def test_config():
    target = buildah()
    target.ctr = 'ctr1'
    await target.config(entrypoint='["dumb-init", "--"]')
    assert target.parent.calls == [
        'buildah config --entrypoint ["dumb-init", "--"] ctr1',
    ]


@pytest.mark.asyncio
async def test_exec_user():
    target = buildah()
    target.ctr = 'ctr1'
    await target.rexec('ls', '/a b')
    assert target.parent.calls == [
        "buildah run --user root ctr1 -- sh -euc ls '/a b'",
    ]


@pytest.mark.asyncio
async def test_base_digest():
    digest = 'sha256:' + 'a' * 64
    target = buildah(*steps(), base=f'quay.io/centos/centos@{digest}')
    assert not await target()

    first = layer(f'centos/centos:latest@{digest}', 'first Run(echo first)')
    assert f'buildah from quay.io/centos/centos@{digest}' in target.parent.calls
    assert (
        f'buildah commit --format=oci ctr1 python311:{first}'
        in target.parent.calls
    )
