import matplotlib.pyplot as plt

from mlpnet.cmdline import TrainerConfig
from mlpnet.datasets import xor_set
from mlpnet.training.trainer import Trainer

# python -m mlpnet.cmd.train_xor -c src/conf/xor.py -n 20 --lr 0.5 --plot
if __name__ == "__main__":
    cfg = TrainerConfig("xor")
    cfg.parse_args()

    rng = cfg.rng()
    net = cfg.build_network(rng=rng)
    training_set = xor_set()

    trainer = Trainer(net, logger=cfg.get_logger(), rng=rng)
    result = trainer.train(cfg.train_config(training_set))

    def show(error: float, output, desired):
        print(f"  output {output[0]:.4f} | desired {desired[0]:.0f} | error {error:.4f}")
    net.test(training_set, show)

    cfg.save(net)

    if cfg.do_plot:
        plt.plot(result.epoch_errors)
        plt.xlabel("epoch")
        plt.ylabel("mean error")
        plt.show()
