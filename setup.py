"""
Setup configuration for arduino_actuators (line-based serial protocol).

This is a pure Python library. It can be installed via:
    - pip install .
    - pip install -e .  (for development)
"""

from setuptools import setup, find_packages

package_name = 'arduino_actuators'

setup(
    name='arduino-actuators',
    version='1.0.0',
    packages=find_packages(exclude=['test', 'tests']),

    install_requires=[
        'pyserial>=3.5',
    ],

    extras_require={
        'dev': [
            'pytest>=7.0',
            'pytest-cov',
            'pytest-timeout',
        ],
    },

    zip_safe=True,

    description='Drive Arduino LEDs and servomotors over a line-based serial protocol',
    long_description=open('README.md').read() if __import__('os').path.exists('README.md') else '',
    long_description_content_type='text/markdown',
    license='MIT',

    # CLI tools
    entry_points={
        'console_scripts': [
            'arduino-actuators = ' + package_name + '.cli:main',
        ],
    },

    python_requires='>=3.8',

    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: Scientific/Engineering :: Robotics',
        'Topic :: System :: Hardware',
    ],
)
