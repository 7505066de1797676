import pytest

from strata import Pip, Stub, StrataException


def test_commands():
    assert Pip('pip', python='python3.11', upgrade=True).commands() == [
        'python3.11 -m pip install --no-cache-dir --upgrade pip',
    ]
    assert Pip(
        'dumb-init',
        python='python3.11',
        constraints='/tmp/src/constraints.txt',
    ).commands() == [
        'python3.11 -m pip install --no-cache-dir'
        ' --constraint /tmp/src/constraints.txt dumb-init',
    ]


def test_reads():
    assert Pip('pip').reads == []
    assert Pip('x', constraints='/tmp/src/c.txt').reads == ['/tmp/src/c.txt']


@pytest.mark.asyncio
async def test_scoped_to_interpreter():
    target = Stub()
    await target(Pip('pip', python='python3.11', upgrade=True))
    assert target.calls == [
        'type python3.11',
        'python3.11 -m pip install --no-cache-dir --upgrade pip',
    ]
    assert not any(call.startswith('python3 ') for call in target.calls)


@pytest.mark.asyncio
async def test_missing_interpreter():
    target = Stub(responses={'^type ': (1, '')})
    with pytest.raises(StrataException) as exc:
        await target(Pip('pip', python='python3.11'))
    assert str(exc.value) == 'Could not find python3.11'
    assert target.calls == ['type python3.11']
