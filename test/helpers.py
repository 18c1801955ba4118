import json
from unittest.mock import Mock

from gitlabbot.config import Config, RedirectRule


def make_config(**overrides) -> Config:
    values = dict(
        bot_username='GitLab',
        bot_channel='gitlabbot',
        bot_icon=':robot_face:',
        push_icon=':arrow_up:',
        merge_icon=':twisted_rightwards_arrows:',
        build_icon=':construction_worker:',
        bot_start_message='GitLab SlackBot started',
        slack_api_url='https://hooks.slack.test/services/T/B/X',
        slack_api_token='xoxp-test',
        slack_api_base='https://slack.test/api',
        channel_prefix='dev-',
        http_timeout=3,
        redirect=(RedirectRule(channel='ops', repositories=('foo', 'infra')),),
    )
    values.update(overrides)
    return Config(**values)


def fake_response(status_code=200, text='ok'):
    resp = Mock()
    resp.status_code = status_code
    resp.text = text
    return resp


def fake_session(post_status=200, get_status=200):
    session = Mock()
    session.get.return_value = fake_response(get_status, '{"ok": true}')
    session.post.return_value = fake_response(post_status, 'ok' if post_status == 200 else 'channel_not_found')
    return session


def commit(id='abc123', message='fix bug', timestamp='2014-11-18T14:34:00Z'):
    return {
        'id': id,
        'url': f'http://x/{id}',
        'message': message,
        'timestamp': timestamp,
        'author': {'name': 'John Smith', 'email': 'john@example.com'},
    }


def push_payload(repo='demo', ref='master', commits=None):
    return {
        'object_kind': 'push',
        'ref': ref,
        'user_name': 'john',
        'repository': {'name': repo},
        'commits': commits if commits is not None else [commit()],
    }


def merge_payload(state='opened', description='Adds feature'):
    return {
        'object_kind': 'merge_request',
        'object_attributes': {
            'state': state,
            'source': {'name': 'demo'},
            'source_branch': 'feature',
            'target': {'name': 'demo'},
            'target_branch': 'master',
            'description': description,
            'created_at': '2014-11-18 14:34:00 UTC',
        },
    }


def build_payload(build_id=10, status='success', repo='demo'):
    return {
        'build_id': build_id,
        'build_status': status,
        'ref': 'master',
        'push_data': {
            'repository': {'name': repo},
            'user_name': 'john',
            'commits': [commit()],
        },
    }


def as_body(payload) -> bytes:
    return json.dumps(payload).encode('utf-8')
