import numpy as np
import matplotlib.pyplot as plt

from mlpnet.cmdline import TrainerConfig
from mlpnet import datasets
from mlpnet.training.trainer import Trainer

BOUNDARY_SIZE = 25
GRID_MIN, GRID_MAX = -6.0, 6.0

# python -m mlpnet.cmd.train_spiral -c src/conf/spiral.py -n 200 --seed 1 --plot
if __name__ == "__main__":
    cfg = TrainerConfig("spiral")
    cfg.add_argument("--npoints", type=int, default=100, help="points per spiral arm")
    cfg.add_argument("--noise", type=float, default=0.001)
    cfg.parse_args()

    rng = cfg.rng()
    net = cfg.build_network(rng=rng)

    train_set = datasets.spiral_set(n=cfg.npoints, noise=cfg.noise, rng=rng)
    scaled_set, (lows, highs) = datasets.scale_set(train_set)

    trainer = Trainer(net, logger=cfg.get_logger(), rng=rng)
    result = trainer.train(cfg.train_config(scaled_set))

    errors = net.test(scaled_set)
    print(f"test: mean abs error {np.mean(errors):.4f} over {len(errors)} samples")

    cfg.save(net)

    if cfg.do_plot:
        grids = datasets.boundary_grid(net, size=BOUNDARY_SIZE, lo=GRID_MIN, hi=GRID_MAX,
                                       transform=lambda inputs: datasets.scale_inputs(inputs, lows, highs))
        output_id = net.neuron_ids()[-1][0]

        fig, (ax_err, ax_bound) = plt.subplots(1, 2, figsize=(12, 5))
        ax_err.plot(result.epoch_errors)
        ax_err.set_xlabel("epoch")
        ax_err.set_ylabel("mean error")

        # grid[i][j] is x index i, y index j (y flipped), so transpose for imshow.
        ax_bound.imshow(grids[output_id].T, cmap="coolwarm", vmin=-1, vmax=1,
                        extent=(GRID_MIN, GRID_MAX, -GRID_MAX, -GRID_MIN))
        for sample in train_set:
            color = "red" if sample.desired_outputs[0] > 0 else "blue"
            ax_bound.scatter(sample.inputs[0], sample.inputs[1], c=color, s=6)
        plt.show()
