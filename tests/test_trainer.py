import re

import pytest

torch = pytest.importorskip("torch")

from vote_perceptron.data import build_dataset
from vote_perceptron.models import MultiLevelPerceptron
from vote_perceptron.training import (
    InsufficientlyTrainedError,
    PerceptronTrainer,
    TrainingConfig,
    train_attempt,
)
from vote_perceptron.training.trainer import EpochMetrics, format_progress

TINY_STEP = TrainingConfig(learning_rate=1e-6)


def _trainer(model, config=TINY_STEP, verbose=False) -> PerceptronTrainer:
    optimizer = torch.optim.SGD(model.parameters(), lr=config.learning_rate)
    return PerceptronTrainer(
        model,
        optimizer=optimizer,
        dataset=build_dataset(),
        config=config,
        device="cpu",
        verbose=verbose,
    )


def test_training_stops_at_first_perfect_epoch(oracle_factory) -> None:
    trainer = _trainer(oracle_factory())
    model = trainer.train()
    assert model is trainer.model
    assert len(trainer.history.epochs) == 1
    assert trainer.history.final_accuracy == 100.0


def test_failed_attempt_runs_every_epoch_then_raises(inverted_factory) -> None:
    trainer = _trainer(inverted_factory())
    with pytest.raises(InsufficientlyTrainedError, match="not trained well enough") as info:
        trainer.train()
    assert [m.epoch for m in trainer.history.epochs] == list(range(1, 11))
    assert info.value.accuracy == 0.0


def test_lower_target_stops_at_first_epoch_meeting_it(constant_zero_factory) -> None:
    config = TrainingConfig(learning_rate=1e-6, target_accuracy=50.0)
    trainer = _trainer(constant_zero_factory(), config=config)
    trainer.train()
    assert len(trainer.history.epochs) == 1
    assert trainer.history.final_accuracy == pytest.approx(200.0 / 3.0)


def test_accuracy_is_a_multiple_of_one_third(constant_zero_factory) -> None:
    trainer = _trainer(constant_zero_factory())
    assert trainer.evaluate() == pytest.approx(200.0 / 3.0)


def test_real_attempt_accuracies_are_discrete() -> None:
    torch.manual_seed(0)
    allowed = [0.0, 100.0 / 3.0, 200.0 / 3.0, 100.0]
    for _ in range(5):
        trainer = _trainer(MultiLevelPerceptron(), config=TrainingConfig())
        try:
            trainer.train()
        except InsufficientlyTrainedError:
            assert len(trainer.history.epochs) == 10
            assert trainer.history.final_accuracy < 100.0
        else:
            assert trainer.history.final_accuracy == 100.0
            assert len(trainer.history.epochs) <= 10
        for metrics in trainer.history.epochs:
            assert any(metrics.accuracy == pytest.approx(value) for value in allowed)
        assert all(m.accuracy != 100.0 for m in trainer.history.epochs[:-1])


def test_train_attempt_builds_fresh_model(oracle_factory) -> None:
    trainer = train_attempt(
        build_dataset(),
        config=TINY_STEP,
        device="cpu",
        verbose=False,
        model_factory=oracle_factory,
    )
    assert isinstance(trainer.optimizer, torch.optim.SGD)
    assert trainer.optimizer.param_groups[0]["lr"] == 1e-6
    assert trainer.history.final_accuracy == 100.0


def test_train_step_updates_parameters() -> None:
    torch.manual_seed(1)
    model = MultiLevelPerceptron()
    before = [p.detach().clone() for p in model.parameters()]
    trainer = _trainer(model, config=TrainingConfig())
    loss = trainer.train_step()
    assert loss > 0
    after = list(model.parameters())
    assert any(not torch.equal(b, a) for b, a in zip(before, after))


def test_progress_line_format(oracle_factory, capsys) -> None:
    _trainer(oracle_factory(), verbose=True).train()
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 1
    assert re.fullmatch(r"Epoch:   1 Train loss: [ \d.]{8} Test accuracy: 100.00%", lines[0])


def test_format_progress_widths() -> None:
    line = format_progress(EpochMetrics(epoch=7, loss=0.5, accuracy=100.0 / 3.0))
    assert line == "Epoch:   7 Train loss:  0.50000 Test accuracy: 33.33%"


def test_training_config_validation() -> None:
    with pytest.raises(ValueError):
        TrainingConfig(epochs=0)
    with pytest.raises(ValueError):
        TrainingConfig(learning_rate=0.0)
    with pytest.raises(ValueError):
        TrainingConfig(target_accuracy=101.0)
