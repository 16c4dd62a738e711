import datetime
import re
import urllib.parse
import concurrent.futures
import pytest
from botocore.auth import SigV2Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials
from awssign import auth
from awssign.auth import QueryAuth, RestAuth, SigV4Auth
from awssign.canonical import Dialect, canonicalize
from awssign.signer import sign, string_to_sign
from awssign.errors import InvalidInputError

#################################################
### Parameters

aws_key = 'EXAMPLE+AWS+KEY'
aws_secret = 'EXAMPLE+AWS+SECRET'
sns_host = 'sns.us-east-1.amazonaws.com'
test_host = 'my.verbalink.com'
test_uri = '/awssign/test'

sns_signature = 'NU/UNneSfY3qMk78Wetdp+7xGyM2uelG+nsr17OEzSU='


def sns_params():
    return {
        'Message': 'Hi Test',
        'TopicArn': 'arn:aws:sns:us-east-1:123456789:example-message',
        'Timestamp': '2012-05-21T21:16:38Z',
        'Version': '2010-03-31',
        'Action': 'Publish',
        'ContentType': 'JSON',
        }


v4_date = 'Mon, 09 Sep 2011 23:36:00 GMT'
v4_canonical_request = 'GET\n/\n\ndate:Mon, 09 Sep 2011 23:36:00 GMT\nhost:host.foo.com\n\ndate;host\ne3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'

rfc3339_re = re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$')

################################################
### Query signature version 2


def test_query_vector():
    """

    """
    signed = QueryAuth(aws_key, aws_secret).sign('GET', sns_host, '/', sns_params())

    assert signed['SignatureVersion'] == ['2']
    assert signed['SignatureMethod'] == ['HmacSHA256']
    assert signed['AWSAccessKeyId'] == [aws_key]
    assert signed['Timestamp'] == ['2012-05-21T21:16:38Z']
    assert signed['Signature'] == [sns_signature]


def test_query_vector_inserted_timestamp():
    params = sns_params()
    del params['Timestamp']
    timestamp = datetime.datetime(2012, 5, 21, 21, 16, 38, tzinfo=datetime.timezone.utc)

    signed = auth.sign_query(aws_key, aws_secret, 'GET', sns_host, '/', params, timestamp=timestamp)

    assert signed['Timestamp'] == ['2012-05-21T21:16:38Z']
    assert signed['Signature'] == [sns_signature]


def test_query_default_timestamp():
    params = sns_params()
    params['Timestamp'] = ''

    signed = QueryAuth(aws_key, aws_secret).sign('GET', sns_host, '/', params)

    assert rfc3339_re.match(signed['Timestamp'][0])
    assert signed['Signature'] != [sns_signature]


def test_query_input_not_modified():
    params = sns_params()
    original = sns_params()

    _ = QueryAuth(aws_key, aws_secret).sign('GET', sns_host, '/', params)

    assert params == original


def test_query_matches_botocore():
    signed = QueryAuth(aws_key, aws_secret).sign('POST', sns_host, '/', sns_params())

    flat = {key: values[0] for key, values in signed.items() if key != 'Signature'}
    request = AWSRequest(method='POST', url=f'https://{sns_host}/')
    _, expected = SigV2Auth(Credentials(aws_key, aws_secret)).calc_signature(request, flat)

    assert signed['Signature'] == [expected]


def test_determinism():
    params = sns_params()
    reversed_params = dict(reversed(list(params.items())))

    signer = QueryAuth(aws_key, aws_secret)
    sig1 = signer.sign('GET', sns_host, '/', params)['Signature']
    sig2 = signer.sign('GET', sns_host, '/', reversed_params)['Signature']

    assert sig1 == sig2


def test_method_sensitivity():
    signer = QueryAuth(aws_key, aws_secret)
    sigs = set()
    for method in ('GET', 'POST', 'PUT', 'DELETE'):
        params = sns_params()
        del params['ContentType']
        sigs.add(signer.sign(method, test_host, test_uri, params)['Signature'][0])

    assert len(sigs) == 4


def test_resign_overwrites():
    signer = QueryAuth('OTHER+KEY', aws_secret)
    first = signer.sign('GET', sns_host, '/', sns_params())

    signer = QueryAuth(aws_key, aws_secret)
    second = signer.sign('GET', sns_host, '/', first)
    third = signer.sign('GET', sns_host, '/', second)

    assert second['AWSAccessKeyId'] == [aws_key]
    assert second['Signature'] == [sns_signature]
    assert third == second
    assert all(len(values) == 1 for values in third.values())


def test_multiple_values():
    params = {'Action': 'Publish', 'Attr': ['a b', 'c']}
    signed = QueryAuth(aws_key, aws_secret).sign('GET', sns_host, '/', params, timestamp='2012-05-21T21:16:38Z')

    body = canonicalize({k: v for k, v in signed.items() if k != 'Signature'}, Dialect.QUERY)

    assert 'Attr=a%20b,c&' in body
    assert signed['Signature'] == [sign(aws_secret, string_to_sign('GET', sns_host, '/', body))]


def test_concurrent_signing():
    params = sns_params()
    signer = QueryAuth(aws_key, aws_secret)

    with concurrent.futures.ThreadPoolExecutor(max_workers=8) as executor:
        futures = [executor.submit(signer.sign, 'GET', sns_host, '/', params) for _ in range(64)]
        results = [f.result() for f in futures]

    assert all(r['Signature'] == [sns_signature] for r in results)
    assert params == sns_params()


@pytest.mark.parametrize('method, host, uri', [
    ('GET', '', '/'),
    ('GET', '   ', '/'),
    ('GET', sns_host, 'no-slash'),
    ('', sns_host, '/'),
    ('GE T', sns_host, '/'),
    ('GET\n', sns_host, '/'),
])
def test_invalid_request(method, host, uri):
    with pytest.raises(InvalidInputError):
        QueryAuth(aws_key, aws_secret).sign(method, host, uri, sns_params())


def test_invalid_values():
    signer = QueryAuth(aws_key, aws_secret)

    with pytest.raises(InvalidInputError):
        signer.sign('GET', sns_host, '/', {'Message': b'\xff'})

    with pytest.raises(InvalidInputError):
        signer.sign('GET', sns_host, '/', {'Message': ['ok', '\ud800']})

    with pytest.raises(TypeError):
        signer.sign('GET', sns_host, '/', {'Message': 5})

    with pytest.raises(InvalidInputError):
        QueryAuth(aws_key, b'\xff\xfe')


################################################
### REST signature


def test_rest_inserts_date():
    params = {'Content-Type': 'text/plain', 'x-amz-meta-foo': 'bar'}

    signed = RestAuth(aws_key, aws_secret).sign('PUT', 's3.amazonaws.com', '/bucket/key', params, timestamp='2012-05-21T21:16:38Z')

    assert signed['date'] == ['2012-05-21T21:16:38Z']

    body = canonicalize({k: v for k, v in signed.items() if k != 'Signature'}, Dialect.QUERY)
    assert body == 'Content-Type=text%2Fplain&date=2012-05-21T21%3A16%3A38Z&x-amz-meta-foo=bar'

    expected = sign(aws_secret, string_to_sign('PUT', 's3.amazonaws.com', '/bucket/key', body))
    assert signed['Signature'] == [expected]
    assert 'SignatureVersion' not in signed


@pytest.mark.parametrize('date_key', ['Date', 'date', 'X-Amz-Date', 'x-amz-date'])
def test_rest_keeps_date(date_key):
    params = {date_key: 'Mon, 21 May 2012 21:16:38 GMT'}

    signed = auth.sign_rest(aws_key, aws_secret, 'GET', 's3.amazonaws.com', '/bucket', params)

    assert set(signed) == {date_key, 'Signature'}
    assert signed[date_key] == ['Mon, 21 May 2012 21:16:38 GMT']


def test_rest_amz_headers():
    params = {'X-Amz-Acl': 'public-read', 'Content-MD5': 'abc', 'Action': 'x'}

    assert RestAuth.amz_headers(params) == 'content-md5:abc\nx-amz-acl:public-read\n'


def test_rest_resign_overwrites():
    signer = RestAuth(aws_key, aws_secret)
    first = signer.sign('GET', 's3.amazonaws.com', '/bucket', {'x-amz-date': '20120521T211638Z'})
    second = signer.sign('GET', 's3.amazonaws.com', '/bucket', first)

    assert first == second


################################################
### Signature version 4


def test_v4_canonical_request():
    signer = SigV4Auth(aws_key, aws_secret)
    params = {'Date': [v4_date], 'Host': ['host.foo.com']}

    assert signer.canonical_request('GET', '/', params) == v4_canonical_request


def test_v4_sign():
    signer = SigV4Auth(aws_key, aws_secret)
    params = {'Host': 'host.foo.com'}

    signed, signature = signer.sign('GET', 'host.foo.com', '/', params, timestamp=v4_date)

    assert signed == {'Host': ['host.foo.com'], 'Date': [v4_date]}
    assert 'Signature' not in signed
    assert signature == sign(aws_secret, 'GET\nhost.foo.com\n/\n' + v4_canonical_request)
    assert params == {'Host': 'host.foo.com'}


def test_v4_date_overwritten():
    params = {'Host': 'host.foo.com', 'Date': 'old'}
    timestamp = datetime.datetime(2011, 9, 9, 23, 36)

    signed, _ = auth.sign_v4(aws_key, aws_secret, 'GET', 'host.foo.com', '/', params, timestamp=timestamp)

    assert signed['Date'] == ['2011-09-09T23:36:00Z']


def test_v4_default_date():
    signed, signature = SigV4Auth(aws_key, aws_secret).sign('GET', 'host.foo.com', '/', {})

    assert rfc3339_re.match(signed['Date'][0])
    assert len(signature) == 44


def test_v4_query_string():
    signer = SigV4Auth(aws_key, aws_secret)
    params = {'Host': 'host.foo.com'}

    url = signer.query_string('GET', 'host.foo.com', '/photos/cat.jpg', params, timestamp=v4_date)
    _, signature = signer.sign('GET', 'host.foo.com', '/photos/cat.jpg', params, timestamp=v4_date)

    split = urllib.parse.urlsplit(url)
    query = urllib.parse.parse_qs(split.query)

    assert split.scheme == 'https'
    assert split.netloc == 'host.foo.com'
    assert split.path == '/photos/cat.jpg'
    assert query == {'Date': [v4_date], 'Host': ['host.foo.com'], 'Signature': [signature]}


def test_presign_v4_resign():
    url1 = auth.presign_v4(aws_key, aws_secret, 'GET', 'host.foo.com', '/', {'Host': 'host.foo.com'}, timestamp=v4_date)

    query = urllib.parse.parse_qs(urllib.parse.urlsplit(url1).query)
    url2 = auth.presign_v4(aws_key, aws_secret, 'GET', 'host.foo.com', '/', query, timestamp=v4_date)

    assert url1 == url2
