from bingo.services.game.visibility import game_over_payload, init_payload, leaderboard, present, score_prediction

from conftest import GROUPS, MEMBERS

ALICE_PICKS = GROUPS[:12]
BOB_PICKS = GROUPS[8:20]


def test_anonymous_view_masks_every_prediction(store):
    store.submit_prediction('Alice', ALICE_PICKS)
    view = present(store)
    assert list(view) == MEMBERS
    assert view['Alice']['prediction'] == {'hasPredicted': True}
    assert view['Bob']['prediction'] == {'hasPredicted': False}


def test_viewer_sees_only_own_prediction(store):
    store.submit_prediction('Alice', ALICE_PICKS)
    store.submit_prediction('Bob', BOB_PICKS)

    as_alice = present(store, 'Alice')
    assert as_alice['Alice']['prediction'] == {'hasPredicted': True, 'prediction': ALICE_PICKS}
    assert as_alice['Bob']['prediction'] == {'hasPredicted': True}
    assert 'prediction' not in as_alice['Cara']['prediction']

    as_cara = present(store, 'Cara')
    assert as_cara['Cara']['prediction'] == {'hasPredicted': False}


def test_bingo_progress_is_public(store):
    for index in (0, 1, 2, 3, 4):
        store.toggle_cell('Bob', index)
    for viewer in (None, 'Alice', 'Bob'):
        entry = present(store, viewer)['Bob']
        assert entry['bingoCount'] == 1
        assert entry['selectedIndices'] == [0, 1, 2, 3, 4]
        assert len(entry['board']) == 25


def test_reveal_unmasks_and_scores_everyone(store):
    store.submit_prediction('Alice', ALICE_PICKS)
    store.submit_prediction('Bob', BOB_PICKS)
    store.reveal_final_lineup(GROUPS[:10])

    for viewer in (None, 'Alice', 'Cara'):
        view = present(store, viewer)
        assert view['Alice']['prediction'] == {'hasPredicted': True, 'prediction': ALICE_PICKS, 'score': 10}
        assert view['Bob']['prediction'] == {'hasPredicted': True, 'prediction': BOB_PICKS, 'score': 2}
        assert view['Cara']['prediction'] == {'hasPredicted': False, 'prediction': [], 'score': 0}


def test_score_counts_distinct_matches():
    assert score_prediction(['A', 'A', 'B'], ['A', 'C']) == 1
    assert score_prediction(['A', 'B'], ['A', 'A', 'B']) == 2
    assert score_prediction(None, ['A']) == 0
    assert score_prediction(['A'], []) == 0


def test_leaderboard_orders_by_score_then_bingos(store):
    assert leaderboard(store) == []
    store.submit_prediction('Alice', BOB_PICKS)
    store.submit_prediction('Bob', BOB_PICKS)
    store.submit_prediction('Cara', ALICE_PICKS)
    for index in (0, 5, 10, 15, 20):
        store.toggle_cell('Bob', index)
    store.reveal_final_lineup(GROUPS[:10])

    board = leaderboard(store)
    assert [row['memberName'] for row in board] == ['Cara', 'Bob', 'Alice']
    assert board[0]['score'] == 10
    assert board[1] == {'memberName': 'Bob', 'score': 2, 'bingoCount': 1, 'hasPredicted': True}


def test_payload_shapes(store):
    payload = init_payload(store, 'Alice')
    assert payload['members'] == MEMBERS
    assert payload['groups'] == GROUPS
    assert payload['finalLineup'] == []
    assert set(payload['gameState']) == set(MEMBERS)

    store.reveal_final_lineup(['Group 1'])
    over = game_over_payload(store)
    assert over['finalLineup'] == ['Group 1']
    assert 'score' in over['gameState']['Alice']['prediction']
    assert len(over['leaderboard']) == len(MEMBERS)
