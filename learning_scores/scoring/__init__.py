"""
scoring/ - Achievement Score Derivation

Modules:
    score_mapper.py     - Linear range normalization (calculate_score, calculate_percentage_achieved)
    activity_score.py   - ActivityScoreResolver: one activity, one actor
    batch_scores.py     - Fail-fast scoring of a list of activities
    event_extractor.py  - xAPI statements → distinct activity ids
"""
