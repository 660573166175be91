#!/usr/bin/env python3
import argparse
import os.path
import time
from dataclasses import replace

from DeviationScale import Model, OutFormat, render_model, save_image


def main():
    args_parser = argparse.ArgumentParser()
    args_parser.add_argument('--format',
                             choices=[f.value for f in OutFormat],
                             default=None,
                             help='Which format to render (all by default)')
    example_models = sorted(Model.example_names())
    args_parser.add_argument('--model',
                             choices=example_models,
                             default=None,
                             help='Which gauge model (all by default)')
    args_parser.add_argument('--positions',
                             type=int,
                             nargs='*',
                             default=None,
                             help='Pointer positions to render (the model position by default)')
    cli_args = args_parser.parse_args()
    base_dir = os.path.relpath('examples/')
    os.makedirs(base_dir, exist_ok=True)
    out_formats = [next(f for f in OutFormat if f.value == cli_args.format)] if cli_args.format else OutFormat
    for model_name in ([cli_args.model] if cli_args.model else example_models):
        print(f'Building example outputs for: {model_name}')
        model = Model.load(model_name)
        positions = cli_args.positions or [model.position]

        for out_format in out_formats:
            for position in positions:
                start_time = time.process_time()
                img = render_model(replace(model, position=position), out_format)
                filename = os.path.join(base_dir, f'{model_name}.DeviationScale')
                print(f' Render time: {round(time.process_time() - start_time, 3)}')
                save_image(img, filename, None if len(positions) == 1 else f'pos{position}')


if __name__ == '__main__':
    main()
