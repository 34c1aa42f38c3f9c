import time

import pytest


def _states(received):
    return [pkt['args'][0] for pkt in received if pkt['name'] == 'state_change']


def _events(received, name):
    return [pkt['args'][0] for pkt in received if pkt['name'] == name]


def _common_symbol(state, player_id):
    player = next(p for p in state['players'] if p['id'] == player_id)
    return sorted(set(player['hand']) & set(state['central_set']))[0]


def test_connect_with_token_joins_the_match(sio_factory, flask_app):
    alice = sio_factory('device-a', 'Alice')
    assert alice.is_connected()

    states = _states(alice.get_received())
    assert states
    assert states[-1]['players'][0]['id'] == 'device-a'
    assert states[-1]['players'][0]['name'] == 'Alice'
    assert flask_app.match_engine.player_count == 1


def test_connect_with_device_cookie_joins_the_match(sio_factory, flask_app):
    guest = sio_factory(headers={'Cookie': 'device_id=cookie-device'})
    assert guest.is_connected()
    assert flask_app.match_engine.snapshot().get_player('cookie-device').name == 'Player 1'


def test_connect_without_identity_is_refused(sio_factory, flask_app):
    anonymous = sio_factory()
    assert not anonymous.is_connected()

    forged = sio_factory(auth={'token': 'forged'})
    assert not forged.is_connected()
    assert flask_app.match_engine.player_count == 0


def test_everyone_receives_the_dealt_round(sio_factory):
    alice = sio_factory('device-a')
    bob = sio_factory('device-b')
    alice.emit('player_ready')

    assert _states(bob.get_received())[-1]['phase'] == 'WAITING_FOR_PLAYERS'

    bob.emit('player_ready')

    phases = [s['phase'] for s in _states(alice.get_received())]
    assert phases[-2:] == ['PREPARE_INITIAL_ROUND', 'WAIT_FOR_PLAYER_MOVE']
    final = _states(bob.get_received())[-1]
    assert len(final['central_set']) == 6
    for player in final['players']:
        assert len(player['hand']) == 6
        assert set(player['hand']) & set(final['central_set'])


def test_moves_are_answered_and_broadcast(sio_factory, flask_app):
    alice = sio_factory('device-a')
    bob = sio_factory('device-b')
    alice.emit('player_ready')
    bob.emit('player_ready')
    state = _states(alice.get_received())[-1]
    bob.get_received()

    symbol = _common_symbol(state, 'device-a')
    alice.emit('move', {'selection': [symbol, symbol]})

    received = alice.get_received()
    assert _events(received, 'move_result') == [{'success': True, 'outcome': 'ACCEPTED'}]
    after = _states(bob.get_received())[-1]
    assert after['phase'] == 'WAIT_FOR_PLAYER_MOVE'
    assert next(p for p in after['players'] if p['id'] == 'device-a')['turns_remaining'] == 1


def test_wrong_move_is_rejected_then_ignored(sio_factory):
    alice = sio_factory('device-a')
    bob = sio_factory('device-b')
    alice.emit('player_ready')
    bob.emit('player_ready')
    state = _states(alice.get_received())[-1]

    hand = next(p for p in state['players'] if p['id'] == 'device-a')['hand']
    wrong = [state['central_set'][0], next(s for s in hand if s != state['central_set'][0])]

    alice.emit('move', {'selection': wrong})
    alice.emit('move', {'selection': wrong})

    results = _events(alice.get_received(), 'move_result')
    assert [r['outcome'] for r in results] == ['REJECTED', 'IGNORED']


def test_winning_move_reaches_results(sio_factory):
    alice = sio_factory('device-a')
    bob = sio_factory('device-b')
    alice.emit('player_ready')
    bob.emit('player_ready')

    for _ in range(2):
        state = _states(alice.get_received())[-1]
        symbol = _common_symbol(state, 'device-a')
        alice.emit('move', {'selection': [symbol, symbol]})

    final = _states(bob.get_received())[-1]
    assert final['phase'] == 'RESULTS'
    assert final['winner_id'] == 'device-a'

    bob.emit('new_match')
    assert _states(alice.get_received())[-1]['phase'] == 'WAITING_FOR_PLAYERS'


def test_disconnect_removes_player(sio_factory, flask_app):
    alice = sio_factory('device-a')
    bob = sio_factory('device-b')
    assert flask_app.match_engine.player_count == 2

    bob.disconnect()

    assert flask_app.match_engine.player_count == 1
    assert [p['id'] for p in _states(alice.get_received())[-1]['players']] == ['device-a']


def test_second_socket_keeps_player_on_roster(sio_factory, flask_app):
    first_tab = sio_factory('device-a')
    second_tab = sio_factory('device-a')
    assert flask_app.match_engine.player_count == 1

    first_tab.disconnect()
    assert flask_app.match_engine.player_count == 1

    second_tab.disconnect()
    assert flask_app.match_engine.player_count == 0


def test_leave_and_rejoin(sio_factory, flask_app):
    alice = sio_factory('device-a')
    alice.emit('leave_match')
    assert flask_app.match_engine.player_count == 0

    alice.emit('join_match')
    assert flask_app.match_engine.player_count == 1


def test_set_name(sio_factory, flask_app):
    alice = sio_factory('device-a')
    alice.emit('set_name', {'name': 'Alice'})
    assert flask_app.match_engine.snapshot().get_player('device-a').name == 'Alice'

    alice.get_received()
    alice.emit('set_name', {'name': '  '})
    assert _events(alice.get_received(), 'error') == [{'error': 'Name is required'}]


@pytest.fixture()
def notified_player(notifying_app):
    """A dealt-in player on an app that sends player_unlocked notices."""
    socketio = notifying_app.socketio
    token = notifying_app.identity_service.issue_token('device-a')['token']
    player = socketio.test_client(notifying_app, auth={'token': token})
    player.emit('player_ready')
    yield player
    if player.is_connected():
        player.disconnect()


def _wrong_selection(state, player_id):
    hand = next(p for p in state['players'] if p['id'] == player_id)['hand']
    central = state['central_set'][0]
    return [central, next(s for s in hand if s != central)]


def _collect(test_client, seconds):
    received = []
    deadline = time.monotonic() + seconds
    while time.monotonic() < deadline:
        received.extend(test_client.get_received())
        if _events(received, 'player_unlocked'):
            break
        time.sleep(0.05)
    return received


def test_rejected_move_announces_unlock(notified_player):
    state = _states(notified_player.get_received())[-1]
    assert state['phase'] == 'WAIT_FOR_PLAYER_MOVE'

    notified_player.emit('move', {'selection': _wrong_selection(state, 'device-a')})

    received = _collect(notified_player, 2.0)
    assert _events(received, 'move_result') == [{'success': False, 'outcome': 'REJECTED'}]
    assert _events(received, 'player_unlocked') == [{'player_id': 'device-a'}]


def test_unlock_notice_dropped_after_new_match(notified_player):
    state = _states(notified_player.get_received())[-1]

    notified_player.emit('move', {'selection': _wrong_selection(state, 'device-a')})
    notified_player.emit('new_match')

    received = _collect(notified_player, 0.8)
    assert _events(received, 'move_result')[0]['outcome'] == 'REJECTED'
    assert _states(received)[-1]['phase'] == 'WAITING_FOR_PLAYERS'
    assert _events(received, 'player_unlocked') == []
