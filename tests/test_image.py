import pytest

from strata import Image, ParameterError


tests = {
    'docker://a.b:1337/re/po:x,y': ('docker', 'a.b:1337', 're/po', 'x,y'),
    'docker://a.b/re/po:x,y': ('docker', 'a.b', 're/po', 'x,y'),
    'a.b:1337/re/po:x,y': (None, 'a.b:1337', 're/po', 'x,y'),
    'a.b/re/po:x,y': (None, 'a.b', 're/po', 'x,y'),
    're/po:x,y': (None, None, 're/po', 'x,y'),
    're/po': (None, None, 're/po', 'latest'),
    'docker://re/po': ('docker', None, 're/po', 'latest'),
    'docker://re/po:x,y': ('docker', None, 're/po', 'x,y'),
    'quay.io/centos/centos:stream9': (None, 'quay.io', 'centos/centos', 'stream9'),
    'localhost:5000/python311': (None, 'localhost:5000', 'python311', 'latest'),
}

DIGEST = 'sha256:' + 'a' * 64


@pytest.mark.parametrize(
    'arg,expected', [(k, dict(
        backend=v[0], registry=v[1], repository=v[2], tags=v[3].split(',')
    )) for k, v in tests.items()]
)
def test_args(arg, expected):
    im = Image(arg)
    for k, v in expected.items():
        assert getattr(im, k) == v


def test_format():
    assert Image('re/po').format == 'oci'
    assert Image('docker://re/po').format == 'docker'
    assert Image('docker.io/re/po').format == 'docker'


@pytest.mark.parametrize('arg', ['', 'Not/Valid', 're po', 're/po:x y'])
def test_validate(arg):
    with pytest.raises(ParameterError):
        Image(arg).validate()


def test_validate_valid():
    image = Image('quay.io/centos/centos:stream9')
    assert image.validate() is image


@pytest.mark.parametrize('arg,repository,tags', [
    (f'quay.io/centos/centos@{DIGEST}', 'centos/centos', ['latest']),
    (f'a.b:1337/re/po:x@{DIGEST}', 're/po', ['x']),
    (f're/po@{DIGEST}', 're/po', ['latest']),
])
def test_digest(arg, repository, tags):
    image = Image(arg).validate()
    assert image.repository == repository
    assert image.tags == tags
    assert image.digest == DIGEST
    assert str(image) == f'{repository}:{tags[-1]}@{DIGEST}'


@pytest.mark.parametrize('digest', ['sha256', 'sha256:xyz', 'sha256:abc'])
def test_digest_invalid(digest):
    with pytest.raises(ParameterError):
        Image(f're/po@{digest}').validate()
